# weldlog/models/weld.py

from sqlalchemy import Index

from .base import BaseModel, db

# Storage columns shared by CRUD, import and export, in canonical order
WELD_CORE_COLUMNS = (
    "date",
    "type_fit",
    "wps",
    "pipe_dia",
    "grade_class",
    "weld_number",
    "welder",
    "first_ht_number",
    "first_length",
    "jt_number",
    "second_ht_number",
    "second_length",
    "pre_heat",
    "vt",
    "process",
    "nde_number",
    "amps",
    "volts",
    "ipm",
)


class Weld(BaseModel):
    """A single weld inspection record"""

    __tablename__ = "welds"

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)

    # Fit-up and procedure
    type_fit = db.Column(db.String(100), nullable=True)
    wps = db.Column(db.String(100), nullable=True)
    pipe_dia = db.Column(db.String(50), nullable=True)
    grade_class = db.Column(db.String(100), nullable=True)
    weld_number = db.Column(db.String(100), nullable=True, index=True)
    welder = db.Column(db.String(200), nullable=True, index=True)

    # Pipe joints either side of the weld
    first_ht_number = db.Column(db.String(100), nullable=True)
    first_length = db.Column(db.String(50), nullable=True)
    jt_number = db.Column(db.String(100), nullable=True)
    second_ht_number = db.Column(db.String(100), nullable=True)
    second_length = db.Column(db.String(50), nullable=True)

    # Process parameters and inspection
    pre_heat = db.Column(db.String(50), nullable=True)
    vt = db.Column(db.String(50), nullable=True)
    process = db.Column(db.String(100), nullable=True)
    nde_number = db.Column(db.String(100), nullable=True)
    amps = db.Column(db.String(50), nullable=True)
    volts = db.Column(db.String(50), nullable=True)
    ipm = db.Column(db.String(50), nullable=True)

    custom_fields = db.Column(db.JSON, nullable=True)
    image_path = db.Column(db.String(500), nullable=True)

    __table_args__ = (Index("idx_welds_date_created", "date", "created_at"),)

    def __repr__(self):
        return f"<Weld {self.id} {self.weld_number or '-'} {self.date}>"

    def to_dict(self):
        """Serialize to the JSON shape used by the REST API"""
        payload = {"id": self.id}
        for column in WELD_CORE_COLUMNS:
            payload[column] = getattr(self, column)
        payload["date"] = self.date.isoformat() if self.date else None
        payload["custom_fields"] = dict(self.custom_fields) if self.custom_fields else None
        payload["image_path"] = self.image_path
        payload["created_at"] = self.created_at.isoformat() if self.created_at else None
        payload["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return payload
