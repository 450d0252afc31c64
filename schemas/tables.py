# schemas/tables.py
from sqlalchemy import Column, Float, Index, Integer, Text, text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Earthquake(Base):
    __tablename__ = "earthquakes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location = Column(Text, nullable=False)
    magnitude = Column(Float, nullable=False)
    # ISO-8601 text; compared lexicographically by the date filters
    date = Column(Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        Index("idx_earthquakes_location", "location"),
        Index("idx_earthquakes_magnitude", "magnitude"),
        Index("idx_earthquakes_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<Earthquake id={self.id} location={self.location!r} magnitude={self.magnitude}>"
