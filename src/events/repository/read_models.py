"""Event read models - return DTOs, never ORM models."""

from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.dtos import EventDTO, EventRsvpsDTO, RsvpDTO
from src.events.repository.orm_models import Event, Rsvp

LATEST_EVENTS_LIMIT = 10


class EventReadModel(ABC):
    @abstractmethod
    async def get_latest_events(self, limit: int = LATEST_EVENTS_LIMIT) -> list[EventDTO]:
        """Most recent events first, by date then start time."""
        raise NotImplementedError

    @abstractmethod
    async def get_event(self, event_id: int) -> EventDTO | None:
        raise NotImplementedError

    @abstractmethod
    async def get_rsvps_by_event(self) -> list[EventRsvpsDTO]:
        """All events (latest first), each with its RSVPs newest first."""
        raise NotImplementedError


class SqlEventReadModel(EventReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_latest_events(self, limit: int = LATEST_EVENTS_LIMIT) -> list[EventDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Event)
                .order_by(Event.date.desc(), Event.start_time.desc())
                .limit(limit)
            )
            return [EventDTO.from_orm(event) for event in result.scalars().all()]

    async def get_event(self, event_id: int) -> EventDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, event_id)
            if event is None:
                return None
            return EventDTO.from_orm(event)

    async def get_rsvps_by_event(self) -> list[EventRsvpsDTO]:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Event, Rsvp)
                .outerjoin(Rsvp, Event.id == Rsvp.event_id)
                .order_by(Event.date.desc(), Event.id, Rsvp.created_at.desc(), Rsvp.id.desc())
            )

            grouped: dict[int, EventRsvpsDTO] = {}
            for event, rsvp in result.all():
                if event.id not in grouped:
                    grouped[event.id] = EventRsvpsDTO(
                        event_id=event.id,
                        title=event.title,
                        date=event.date,
                    )
                if rsvp is not None:
                    grouped[event.id].rsvps.append(RsvpDTO.from_orm(rsvp))

            return list(grouped.values())
