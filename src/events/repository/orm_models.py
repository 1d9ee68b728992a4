from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Lexical formats are enforced on input: YYYY-MM-DD and HH:MM
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    location: Mapped[str] = mapped_column(String(500), nullable=False)

    rsvps: Mapped[list["Rsvp"]] = relationship(
        "Rsvp",
        back_populates="event",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Event {self.title} on {self.date}>"


class Rsvp(Base, TimeStamp):
    __tablename__ = TableNames.RSVPS.value

    event_id: Mapped[int] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    event: Mapped["Event"] = relationship("Event", back_populates="rsvps")

    def __repr__(self) -> str:
        return f"<Rsvp {self.email} for event {self.event_id}>"
