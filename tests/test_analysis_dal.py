import asyncio

import pytest

from dal.analysis_dal import AnalysisDAL
from models.analysis_record import AnalysisRecord
from utils.database_init import AsyncDatabaseInitializer


@pytest.fixture
def dal(tmp_path):
    return AnalysisDAL(AsyncDatabaseInitializer(tmp_path / "db"))


def test_create_assigns_id_and_timestamps(dal):
    saved = asyncio.run(dal.create_analysis(AnalysisRecord(id=None, result={"x": 1})))

    assert saved.id
    assert saved.created_at == saved.updated_at
    assert saved.created_at.endswith("Z")
    assert saved.refer_to_derm is False

    loaded = asyncio.run(dal.get_analysis_by_id(saved.id))
    assert loaded == saved


def test_list_is_newest_first_and_capped(dal):
    async def scenario():
        for index in range(5):
            await dal.create_analysis(AnalysisRecord(id=None, result={"n": index}))
        return await dal.list_analyses(limit=3)

    records = asyncio.run(scenario())
    assert [r.result["n"] for r in records] == [4, 3, 2]


def test_update_changes_only_given_fields(dal):
    async def scenario():
        saved = await dal.create_analysis(
            AnalysisRecord(id=None, result={"x": 1}, notes="first", image_name="a.jpg")
        )
        updated = await dal.update_analysis(saved.id, {"notes": "second", "refer_to_derm": True})
        return saved, updated

    saved, updated = asyncio.run(scenario())
    assert updated.notes == "second"
    assert updated.refer_to_derm is True
    assert updated.result == {"x": 1}
    assert updated.image_name == "a.jpg"
    assert updated.created_at == saved.created_at
    assert updated.updated_at >= saved.updated_at


def test_update_and_delete_missing_rows(dal):
    assert asyncio.run(dal.update_analysis("missing", {"notes": "x"})) is None
    assert asyncio.run(dal.delete_analysis("missing")) is False


def test_delete_removes_row(dal):
    async def scenario():
        saved = await dal.create_analysis(AnalysisRecord(id=None, result={"rawText": "hi"}))
        removed = await dal.delete_analysis(saved.id)
        return removed, await dal.get_analysis_by_id(saved.id)

    removed, after = asyncio.run(scenario())
    assert removed is True
    assert after is None


def test_records_survive_a_new_initializer(tmp_path):
    first = AnalysisDAL(AsyncDatabaseInitializer(tmp_path / "db"))
    saved = asyncio.run(first.create_analysis(AnalysisRecord(id=None, result={"kept": True})))

    second = AnalysisDAL(AsyncDatabaseInitializer(tmp_path / "db"))
    assert asyncio.run(second.get_analysis_by_id(saved.id)).result == {"kept": True}


def test_database_dir_pointing_at_file_is_rejected(tmp_path):
    target = tmp_path / "not-a-dir"
    target.write_text("x")
    with pytest.raises(RuntimeError):
        AsyncDatabaseInitializer(target)
