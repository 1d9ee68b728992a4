"""Event write models - return DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.email_service.base import EmailServiceBase
from src.events.dtos import EventCreate, EventDTO, EventNotFoundError, RsvpCreate, RsvpDTO
from src.events.repository.orm_models import Event, Rsvp

logger = logging.getLogger(__name__)


class EventWriteModel(ABC):
    @abstractmethod
    async def add_event(self, event: EventCreate) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_id: int) -> None:
        """Delete an event and its RSVPs. Unknown ids are a no-op."""
        raise NotImplementedError


class RsvpWriteModel(ABC):
    @abstractmethod
    async def add_rsvp(self, rsvp: RsvpCreate) -> RsvpDTO:
        """
        Persist an RSVP and notify the admins.

        Raises EventNotFoundError if the event no longer exists.
        """
        raise NotImplementedError


class SqlEventWriteModel(EventWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def add_event(self, event: EventCreate) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            orm_event = Event(
                title=event.event_title,
                description=event.event_description,
                date=event.event_date,
                start_time=event.event_start_time,
                end_time=event.event_end_time,
                price=event.event_price,
                location=event.event_location,
            )
            session.add(orm_event)
            await session.flush()
            await session.refresh(orm_event)
            logger.info(f"Created event {orm_event.id}: {orm_event.title}")
            return EventDTO.from_orm(orm_event)

    async def delete_event(self, event_id: int) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await session.execute(delete(Rsvp).where(Rsvp.event_id == event_id))
            await session.execute(delete(Event).where(Event.id == event_id))
            logger.info(f"Deleted event {event_id}")


class SqlRsvpWriteModel(RsvpWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
        admin_email_receivers: list[str] | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.email_service = email_service
        self.admin_email_receivers = admin_email_receivers or []

    async def add_rsvp(self, rsvp: RsvpCreate) -> RsvpDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, rsvp.event_id)
            if event is None:
                raise EventNotFoundError(rsvp.event_id)

            orm_rsvp = Rsvp(
                event_id=rsvp.event_id,
                name=rsvp.rsvp_name,
                email=str(rsvp.rsvp_email),
            )
            session.add(orm_rsvp)
            await session.flush()
            await session.refresh(orm_rsvp)

            event_title = event.title
            event_date = event.date
            rsvp_dto = RsvpDTO.from_orm(orm_rsvp)

        await self._notify_admins(rsvp_dto, event_title, event_date)
        return rsvp_dto

    async def _notify_admins(self, rsvp: RsvpDTO, event_title: str, event_date: str) -> None:
        """Best effort: a failed notification never undoes the RSVP."""
        if not self.email_service or not self.admin_email_receivers:
            return
        try:
            await self.email_service.send_rsvp_notification(
                to_addresses=self.admin_email_receivers,
                event_title=event_title,
                event_date=event_date,
                rsvp_name=rsvp.name,
                rsvp_email=rsvp.email,
            )
        except Exception:
            logger.exception(f"Failed to send RSVP notification for event {rsvp.event_id}")
