"""Unit tests for MongoDB document database provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest


class TestMongoDBDocumentDB:
    """Tests for MongoDBDocumentDB provider.

    These tests verify the ID mapping behavior between domain model 'id'
    and MongoDB's '_id' field.
    """

    @pytest.fixture
    def mock_motor_client(self):
        """Create a mock Motor client."""
        with patch(
            "techtube.commons.infrastructure.documentdb.mongodb_provider.AsyncIOMotorClient"
        ) as mock_client_class:
            mock_client = MagicMock()
            mock_db = MagicMock()
            mock_collection = MagicMock()

            mock_client.__getitem__ = MagicMock(return_value=mock_db)
            mock_db.__getitem__ = MagicMock(return_value=mock_collection)

            mock_client_class.return_value = mock_client

            yield {
                "client_class": mock_client_class,
                "client": mock_client,
                "db": mock_db,
                "collection": mock_collection,
            }

    @pytest.fixture
    def mongodb_provider(self, mock_motor_client):
        """Create MongoDB provider with mocked client."""
        from techtube.commons.infrastructure.documentdb.mongodb_provider import (
            MongoDBDocumentDB,
        )

        return MongoDBDocumentDB(
            connection_string="mongodb://localhost:27017",
            database_name="test_db",
        )

    @staticmethod
    def _cursor(*documents):
        async def iterate():
            for doc in documents:
                yield doc

        cursor = MagicMock()
        cursor.sort = MagicMock(return_value=cursor)
        cursor.limit = MagicMock(return_value=cursor)
        cursor.__aiter__ = lambda self: iterate()
        return cursor

    # =========================================================================
    # Insert Tests
    # =========================================================================

    async def test_insert_uses_id_as_mongodb_id(
        self, mongodb_provider, mock_motor_client
    ):
        """Test that insert uses document 'id' as MongoDB '_id'."""
        collection = mock_motor_client["collection"]
        collection.insert_one = AsyncMock(
            return_value=MagicMock(inserted_id="test-uuid-123")
        )

        document = {
            "id": "test-uuid-123",
            "asset_id": "videos/abc123",
            "title": "Test Video",
        }

        result = await mongodb_provider.insert("videos", document)

        call_args = collection.insert_one.call_args[0][0]
        assert call_args["_id"] == "test-uuid-123"
        assert "id" not in call_args
        assert result == "test-uuid-123"

    async def test_insert_does_not_modify_original_document(
        self, mongodb_provider, mock_motor_client
    ):
        """Test that insert leaves the caller's document untouched."""
        collection = mock_motor_client["collection"]
        collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id="x"))

        original = {"id": "x", "title": "Test Video"}
        await mongodb_provider.insert("videos", original)

        assert original == {"id": "x", "title": "Test Video"}

    # =========================================================================
    # Find Tests
    # =========================================================================

    async def test_find_by_id(self, mongodb_provider, mock_motor_client):
        """Test find_by_id maps '_id' back to 'id'."""
        collection = mock_motor_client["collection"]
        collection.find_one = AsyncMock(
            return_value={"_id": "test-uuid-123", "title": "Test Video"}
        )

        result = await mongodb_provider.find_by_id("videos", "test-uuid-123")

        collection.find_one.assert_called_with({"_id": "test-uuid-123"})
        assert result == {"id": "test-uuid-123", "title": "Test Video"}

    async def test_find_by_id_not_found(self, mongodb_provider, mock_motor_client):
        """Test find_by_id when document not found."""
        mock_motor_client["collection"].find_one = AsyncMock(return_value=None)

        assert await mongodb_provider.find_by_id("videos", "nonexistent") is None

    async def test_find_returns_id_field(self, mongodb_provider, mock_motor_client):
        """Test that find returns documents with 'id' field."""
        collection = mock_motor_client["collection"]
        collection.find = MagicMock(
            return_value=self._cursor(
                {"_id": "uuid-1", "title": "Video 1"},
                {"_id": "uuid-2", "title": "Video 2"},
            )
        )

        results = await mongodb_provider.find("videos", {})

        assert [doc["id"] for doc in results] == ["uuid-1", "uuid-2"]
        assert all("_id" not in doc for doc in results)

    async def test_find_applies_sort_and_limit(
        self, mongodb_provider, mock_motor_client
    ):
        """Test that find passes sort and limit to the cursor."""
        cursor = self._cursor()
        mock_motor_client["collection"].find = MagicMock(return_value=cursor)

        await mongodb_provider.find(
            "videos", {}, limit=20, sort=[("created_at", -1)]
        )

        cursor.sort.assert_called_once_with([("created_at", -1)])
        cursor.limit.assert_called_once_with(20)

    async def test_find_without_sort(self, mongodb_provider, mock_motor_client):
        """Test that find leaves natural order when no sort is given."""
        cursor = self._cursor()
        mock_motor_client["collection"].find = MagicMock(return_value=cursor)

        await mongodb_provider.find("videos", {})

        cursor.sort.assert_not_called()

    # =========================================================================
    # Health Tests
    # =========================================================================

    async def test_health_check_healthy(self, mongodb_provider, mock_motor_client):
        """Test health check when the server answers ping."""
        mock_motor_client["client"].admin.command = AsyncMock(return_value={"ok": 1})

        status = await mongodb_provider.health_check()

        assert status.healthy is True
        assert status.details["database"] == "test_db"

    async def test_health_check_unhealthy(self, mongodb_provider, mock_motor_client):
        """Test health check when the server is unreachable."""
        mock_motor_client["client"].admin.command = AsyncMock(
            side_effect=ConnectionError("no route")
        )

        status = await mongodb_provider.health_check()

        assert status.healthy is False
        assert "no route" in status.message

    async def test_close(self, mongodb_provider, mock_motor_client):
        """Test close closes the Motor client."""
        await mongodb_provider.close()
        mock_motor_client["client"].close.assert_called_once()
