"""
Tests for the manage_share.py maintenance script.
The script runs against an injected in-memory repository instead of MongoDB.
"""
import json
import pytest
from unittest.mock import MagicMock, patch

import manage_share
from app.repositories.model_repository import InMemoryModelRepository
from tests.conftest import make_model


def run(argv, repo):
    args = manage_share.build_parser().parse_args(argv)
    return manage_share.main(args, repository=repo)


@pytest.fixture
def repo():
    return InMemoryModelRepository([
        make_model(None, _id="m-new"),
        make_model({"_id": "share-1", "active": True, "importAllowed": False}, _id="m-shared"),
    ])


class TestManageShare:

    @pytest.mark.asyncio
    async def test_share_enables_link(self, repo, capsys):
        assert await run(["share", "m-new", "--import-allowed"], repo) == 0

        out = capsys.readouterr().out
        assert out.startswith("active  import=yes  ")
        share_id = out.strip().rsplit("/share/", 1)[1]
        doc = await repo.find_one({"shareOptions._id": share_id})
        assert doc["_id"] == "m-new"

    @pytest.mark.asyncio
    async def test_unshare_deactivates_link(self, repo, capsys):
        assert await run(["unshare", "m-shared"], repo) == 0

        assert capsys.readouterr().out.startswith("inactive  import=no  ")
        doc = await repo.find_one({"_id": "m-shared"})
        assert doc["shareOptions"]["active"] is False

    @pytest.mark.asyncio
    async def test_allow_import_toggles_flag(self, repo, capsys):
        assert await run(["allow-import", "m-shared"], repo) == 0
        assert (await repo.find_one({"_id": "m-shared"}))["shareOptions"]["importAllowed"] is True

        assert await run(["allow-import", "m-shared", "--off"], repo) == 0
        assert (await repo.find_one({"_id": "m-shared"}))["shareOptions"]["importAllowed"] is False
        assert "import=no" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_show_prints_public_view(self, repo, capsys):
        assert await run(["show", "share-1"], repo) == 0

        assert json.loads(capsys.readouterr().out) == {
            "id": "share-1",
            "model": {"nodes": [], "edges": []},
            "type": "conceptual",
            "name": "Test Model",
            "importAllowed": False,
        }

    @pytest.mark.asyncio
    async def test_show_inactive_share_exits_1(self, repo, capsys):
        await run(["unshare", "m-shared"], repo)
        capsys.readouterr()

        assert await run(["show", "share-1"], repo) == 1
        assert "not active or does not exist" in capsys.readouterr().err

    @pytest.mark.asyncio
    @pytest.mark.parametrize("argv", [["share", "missing"], ["unshare", "m-new"], ["allow-import", "missing"]])
    async def test_unknown_model_exits_1(self, repo, capsys, argv):
        assert await run(argv, repo) == 1
        assert "Model not found" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_default_repository_uses_mongo_and_closes_client(self, capsys):
        client = MagicMock()
        with patch.object(manage_share, "AsyncIOMotorClient", return_value=client), \
                patch.object(manage_share, "MongoModelRepository", return_value=InMemoryModelRepository()) as mongo_repo:
            args = manage_share.build_parser().parse_args(["show", "nothing"])
            assert await manage_share.main(args) == 1

        mongo_repo.assert_called_once()
        client.close.assert_called_once()

    def test_hex_model_ids_become_object_ids(self):
        from bson import ObjectId

        raw = "0123456789abcdef01234567"
        assert manage_share._model_id(raw) == ObjectId(raw)
        assert manage_share._model_id("m-new") == "m-new"
