import pytest
from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from quotebuilder.items.domain.entities import DoorItem, WindowItem
from quotebuilder.quotes.application.services import QuotePersistenceService
from quotebuilder.quotes.domain.entities import QuoteMeta
from quotebuilder.quotes.domain.exceptions import NotFoundError, StoreError, ValidationError
from quotebuilder.quotes.domain.repositories import AbstractQuoteRepository
from quotebuilder.quotes.infrastructure.persistence import SQLAlchemyQuoteRepository

META = QuoteMeta(builder_name="Acme Builders", job_name="Smith Residence")


@pytest.fixture
def service(db_session) -> QuotePersistenceService:
    return QuotePersistenceService(SQLAlchemyQuoteRepository(session=db_session))


@pytest.fixture
def mock_repo() -> AsyncMock:
    return AsyncMock(spec=AbstractQuoteRepository)


# --- Validation avant tout accès au store ---

@pytest.mark.asyncio
async def test_save_empty_quote_makes_no_store_call(mock_repo):
    service = QuotePersistenceService(mock_repo)
    with pytest.raises(ValidationError) as exc_info:
        await service.save(META, [], "user-1")
    assert exc_info.value.code == "empty_quote"
    assert mock_repo.mock_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("meta,owner,code", [
    (META, None, "not_authenticated"),
    (QuoteMeta(builder_name="", job_name="Job"), "user-1", "missing_information"),
    (QuoteMeta(builder_name="Acme", job_name="   "), "user-1", "missing_information"),
])
async def test_save_validation_codes(mock_repo, casement_window, meta, owner, code):
    service = QuotePersistenceService(mock_repo)
    with pytest.raises(ValidationError) as exc_info:
        await service.save(meta, [casement_window], owner)
    assert exc_info.value.code == code
    assert mock_repo.mock_calls == []


@pytest.mark.asyncio
async def test_save_invalid_dimension_before_store(mock_repo):
    service = QuotePersistenceService(mock_repo)
    bad = WindowItem(width="wide", height="48", style="fixed")
    with pytest.raises(ValidationError) as exc_info:
        await service.save(META, [bad], "user-1")
    assert exc_info.value.code == "invalid_dimension"
    assert mock_repo.mock_calls == []

# --- Store réel (SQLite en mémoire) ---

@pytest.mark.asyncio
async def test_save_then_load_round_trip(service, casement_window, lh_door):
    items = [casement_window, lh_door]
    saved = await service.save(META, items, "user-1")

    assert saved.quote_number == 1
    assert saved.user_id == "user-1"
    loaded = await service.load(saved.id)
    assert len(loaded.items) == 2
    window, door = loaded.items
    assert isinstance(window, WindowItem) and isinstance(door, DoorItem)
    assert (window.width, window.height, window.style, window.sub_option) == ("36", "48", "casement", "left")
    assert (door.width, door.height, door.panel_type, door.handing) == ("36", "80", "single", "lh-in")
    assert loaded.items == items


@pytest.mark.asyncio
async def test_quote_numbers_increase(service, casement_window):
    first = await service.save(META, [casement_window], "user-1")
    second = await service.save(META, [casement_window], "user-2")
    assert second.quote_number > first.quote_number


@pytest.mark.asyncio
async def test_saving_twice_keeps_number_and_content(service, casement_window, lh_door):
    first = await service.save(META, [casement_window, lh_door], "user-1")
    second = await service.save(META, [casement_window, lh_door], "user-1", existing_quote_id=first.id)
    assert second.id == first.id
    assert second.quote_number == first.quote_number
    assert second.items == first.items


@pytest.mark.asyncio
async def test_update_replaces_all_items(service, casement_window, lh_door):
    saved = await service.save(META, [casement_window, lh_door, casement_window], "user-1")
    renamed = QuoteMeta(builder_name="Acme Builders", job_name="Smith Residence - Phase 2")
    updated = await service.save(renamed, [lh_door], "user-1", existing_quote_id=saved.id)

    assert updated.job_name == "Smith Residence - Phase 2"
    assert updated.items == [lh_door]


@pytest.mark.asyncio
async def test_save_unknown_quote_raises_not_found(service, casement_window):
    with pytest.raises(NotFoundError):
        await service.save(META, [casement_window], "user-1", existing_quote_id="missing")


@pytest.mark.asyncio
async def test_load_missing_quote(service):
    with pytest.raises(NotFoundError):
        await service.load("missing")


@pytest.mark.asyncio
async def test_delete_quote(service, casement_window):
    saved = await service.save(META, [casement_window], "user-1")
    await service.delete(saved.id)
    with pytest.raises(NotFoundError):
        await service.load(saved.id)
    with pytest.raises(NotFoundError):
        await service.delete(saved.id)


@pytest.mark.asyncio
async def test_list_for_user_newest_first(service, casement_window):
    first = await service.save(META, [casement_window], "user-1")
    await service.save(META, [casement_window], "someone-else")
    second = await service.save(META, [casement_window], "user-1")

    summaries = await service.list_for_user("user-1")
    assert [s.id for s in summaries] == [second.id, first.id]

# --- Propagation des erreurs du store ---

@pytest.mark.asyncio
async def test_store_error_rolls_back(mock_repo, casement_window):
    mock_repo.add_quote.return_value = 1
    mock_repo.add_items.side_effect = StoreError("insert items")
    service = QuotePersistenceService(mock_repo)

    with pytest.raises(StoreError):
        await service.save(META, [casement_window], "user-1")
    mock_repo.rollback.assert_awaited_once()
    mock_repo.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_sqlalchemy_error_surfaces_as_store_error(db_session, mocker, casement_window):
    repo = SQLAlchemyQuoteRepository(session=db_session)
    mocker.patch.object(
        db_session, "flush", AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full")))
    )
    with pytest.raises(StoreError) as exc_info:
        await QuotePersistenceService(repo).save(META, [casement_window], "user-1")
    assert exc_info.value.operation == "insert quote"
