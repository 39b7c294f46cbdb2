"""Unit tests for the note ownership guard."""

from uuid import uuid4

import pytest

from notekeep.core.errors import AppError, ErrorKind
from notekeep.core.services.ownership import OwnershipGuard


class FakeNotes:
    def __init__(self, owners=None):
        self.owners = dict(owners or {})

    async def exists(self, note_id):
        return note_id in self.owners

    async def owner_of(self, note_id):
        return self.owners.get(note_id)


@pytest.mark.asyncio
async def test_owner_passes():
    user_id, note_id = uuid4(), uuid4()
    guard = OwnershipGuard(FakeNotes({note_id: user_id}))

    assert await guard.assert_ownership(user_id, note_id) is None


@pytest.mark.asyncio
async def test_other_user_is_rejected():
    owner, intruder, note_id = uuid4(), uuid4(), uuid4()
    guard = OwnershipGuard(FakeNotes({note_id: owner}))

    with pytest.raises(AppError) as exc_info:
        await guard.assert_ownership(intruder, note_id)

    assert exc_info.value.kind is ErrorKind.AUTHORIZATION
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "You do not have permission to access this note"


@pytest.mark.asyncio
async def test_missing_note_is_not_found():
    guard = OwnershipGuard(FakeNotes())

    with pytest.raises(AppError) as exc_info:
        await guard.assert_ownership(uuid4(), uuid4())

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert exc_info.value.message == "Note not found"


@pytest.mark.asyncio
async def test_note_deleted_between_checks_is_not_found():
    note_id = uuid4()

    class VanishingNotes(FakeNotes):
        async def owner_of(self, note_id):
            return None

    guard = OwnershipGuard(VanishingNotes({note_id: uuid4()}))

    with pytest.raises(AppError) as exc_info:
        await guard.assert_ownership(uuid4(), note_id)

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
