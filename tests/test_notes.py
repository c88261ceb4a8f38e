"""Learning notes."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from web3journey.database.session import async_session_maker
from web3journey.notes.schemas import MAX_TAGS, NoteSave, count_words, normalize_tags
from web3journey.notes.service import NotesService


class TestSchemas:
    def test_tags_are_trimmed_lowercased_and_deduplicated(self) -> None:
        assert normalize_tags([" Solidity", "solidity", "", "EVM ", "  "]) == ["solidity", "evm"]

    def test_too_many_tags(self) -> None:
        with pytest.raises(ValidationError):
            NoteSave(content="x", tags=[f"tag-{i}" for i in range(MAX_TAGS + 1)])

    def test_duplicates_do_not_count_towards_the_limit(self) -> None:
        note = NoteSave(content="x", tags=["same"] * (MAX_TAGS + 5))
        assert note.tags == ["same"]

    def test_count_words(self) -> None:
        assert count_words("") == 0
        assert count_words("  gas  is\nmeasured in   wei ") == 5


@pytest.mark.db
@pytest.mark.usefixtures("database")
class TestNotesService:
    @pytest.mark.asyncio
    async def test_save_creates_then_replaces(self) -> None:
        user_id = uuid4()
        async with async_session_maker() as session:
            service = NotesService(session)
            first = await service.save_note(user_id, "topic", "evm", NoteSave(content="stack machine", tags=["EVM"]))
            second = await service.save_note(
                user_id, "topic", "evm", NoteSave(title="EVM", content="256 bit stack machine", is_pinned=True)
            )

            assert second.id == first.id
            assert second.word_count == 4
            assert second.tags == []
            assert second.is_pinned
            assert len(await service.list_notes(user_id)) == 1

    @pytest.mark.asyncio
    async def test_list_puts_pinned_first_and_filters(self) -> None:
        user_id = uuid4()
        async with async_session_maker() as session:
            service = NotesService(session)
            await service.save_note(user_id, "module", "defi-development", NoteSave(content="amm"))
            await service.save_note(user_id, "project", "dex-interface", NoteSave(content="ui", is_pinned=True))

            notes = await service.list_notes(user_id)
            assert [n.reference_id for n in notes] == ["dex-interface", "defi-development"]

            modules_only = await service.list_notes(user_id, "module")
            assert [n.reference_id for n in modules_only] == ["defi-development"]

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        user_id = uuid4()
        async with async_session_maker() as session:
            service = NotesService(session)
            await service.save_note(user_id, "module", "nft-development", NoteSave(content="erc721"))

            assert await service.delete_note(user_id, "module", "nft-development")
            assert not await service.delete_note(user_id, "module", "nft-development")
            assert await service.get_note(user_id, "module", "nft-development") is None
