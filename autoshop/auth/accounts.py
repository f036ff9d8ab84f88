"""User accounts and their MongoDB repository (collection: users)."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from autoshop.config import get_database
from autoshop.rbac import Role
from autoshop.utils import to_object_id
from autoshop.utils.exceptions import DuplicateEmail


class Account(BaseModel):
    id: str
    name: str
    email: str
    password_hash: str
    role: Role = Role.SERVICE_STAFF
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "Account":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            password_hash=doc["password_hash"],
            role=doc.get("role", Role.SERVICE_STAFF),
            is_active=doc.get("is_active", True),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )

    def public(self) -> dict:
        """Account fields safe to return to a client."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class AccountRepository:
    """find_by_email / find_by_id / list / create / update / delete over `users`."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.users = db["users"]

    async def find_by_email(self, email: str) -> Optional[Account]:
        doc = await self.users.find_one({"email": email})
        return Account.from_doc(doc) if doc else None

    async def find_by_id(self, account_id: str) -> Optional[Account]:
        oid = to_object_id(account_id)
        if oid is None:
            return None
        doc = await self.users.find_one({"_id": oid})
        return Account.from_doc(doc) if doc else None

    async def list(self) -> list[Account]:
        cursor = self.users.find({}).sort("created_at", -1)
        return [Account.from_doc(d) async for d in cursor]

    async def create(self, fields: dict) -> Account:
        now = datetime.now(timezone.utc)
        doc = {
            "name": fields["name"],
            "email": fields["email"],
            "password_hash": fields["password_hash"],
            "role": Role(fields.get("role", Role.SERVICE_STAFF)).value,
            "is_active": fields.get("is_active", True),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.users.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateEmail()
        doc["_id"] = result.inserted_id
        return Account.from_doc(doc)

    async def update(self, account_id: str, fields: dict) -> Optional[Account]:
        oid = to_object_id(account_id)
        if oid is None:
            return None
        changes = {k: v for k, v in fields.items() if v is not None}
        if "role" in changes:
            changes["role"] = Role(changes["role"]).value
        changes["updated_at"] = datetime.now(timezone.utc)
        doc = await self.users.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return Account.from_doc(doc) if doc else None

    async def delete(self, account_id: str) -> bool:
        oid = to_object_id(account_id)
        if oid is None:
            return False
        result = await self.users.delete_one({"_id": oid})
        return result.deleted_count == 1


async def get_account_repository(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> AccountRepository:
    return AccountRepository(db)
