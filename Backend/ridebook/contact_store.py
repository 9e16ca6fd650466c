"""
Contact Store

Persistence for returning-customer profiles, keyed by normalized phone.

Classes:
    ContactStore - async interface used by the booking endpoints
    SqlContactStore - SQLAlchemy implementation over an AsyncSession
    InMemoryContactStore - dict-backed implementation for tests and local runs

Upsert races:
    Two submissions for the same phone can both miss on lookup and both try to
    insert. The unique constraint on contacts.phone_key rejects the second
    insert; the losing writer rolls back, re-reads the winner's row and applies
    its values as an update.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Contact
from .phone import normalize_phone

logger = logging.getLogger(__name__)

UPSERT_MAX_ATTEMPTS = 3


class ContactStoreError(Exception):
    """Raised when the contact store cannot complete a read or write."""


class ContactStore(ABC):
    """Lookup and upsert of contacts by phone number."""

    @abstractmethod
    async def find_by_phone(self, phone: str) -> Optional[Contact]:
        """Return the contact whose normalized phone matches, or None."""

    @abstractmethod
    async def upsert(self, phone: str, first_name: str, last_name: str, email: str) -> Contact:
        """Create the contact, or overwrite name and email on the existing one."""


class SqlContactStore(ContactStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_by_key(self, phone_key: str) -> Optional[Contact]:
        result = await self.session.execute(
            select(Contact).where(Contact.phone_key == phone_key)
        )
        return result.scalar_one_or_none()

    async def find_by_phone(self, phone: str) -> Optional[Contact]:
        try:
            return await self._get_by_key(normalize_phone(phone))
        except SQLAlchemyError as exc:
            logger.exception(f"Contact lookup failed for phone={phone!r}")
            raise ContactStoreError("Contact lookup failed") from exc

    async def upsert(self, phone: str, first_name: str, last_name: str, email: str) -> Contact:
        phone_key = normalize_phone(phone)

        for attempt in range(1, UPSERT_MAX_ATTEMPTS + 1):
            try:
                contact = await self._get_by_key(phone_key)
                created = contact is None
                if created:
                    contact = Contact(
                        phone=phone,
                        phone_key=phone_key,
                        first_name=first_name,
                        last_name=last_name,
                        email=email,
                    )
                    self.session.add(contact)
                else:
                    contact.first_name = first_name
                    contact.last_name = last_name
                    contact.email = email

                await self.session.commit()
                await self.session.refresh(contact)
            except IntegrityError:
                await self.session.rollback()
                logger.warning(
                    f"Contact upsert conflict for phone_key={phone_key} "
                    f"(attempt {attempt}/{UPSERT_MAX_ATTEMPTS}), retrying as update"
                )
                continue
            except SQLAlchemyError as exc:
                await self.session.rollback()
                logger.exception(f"Contact upsert failed for phone_key={phone_key}")
                raise ContactStoreError("Contact upsert failed") from exc

            logger.info(f"{'Created' if created else 'Updated'} contact id={contact.id}")
            return contact

        raise ContactStoreError(
            f"Contact upsert for phone_key={phone_key} kept conflicting after "
            f"{UPSERT_MAX_ATTEMPTS} attempts"
        )


class InMemoryContactStore(ContactStore):
    """
    Contact store held in process memory.

    Upserts are serialized by a single lock, so the one-row-per-phone rule
    holds without a database constraint.
    """

    def __init__(self):
        self._contacts: dict[str, Contact] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._contacts)

    async def find_by_phone(self, phone: str) -> Optional[Contact]:
        return self._contacts.get(normalize_phone(phone))

    async def upsert(self, phone: str, first_name: str, last_name: str, email: str) -> Contact:
        phone_key = normalize_phone(phone)
        async with self._lock:
            contact = self._contacts.get(phone_key)
            if contact is None:
                contact = Contact(
                    id=self._next_id,
                    phone=phone,
                    phone_key=phone_key,
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    created_at=datetime.now(timezone.utc),
                )
                self._contacts[phone_key] = contact
                self._next_id += 1
            else:
                contact.first_name = first_name
                contact.last_name = last_name
                contact.email = email
        return contact
