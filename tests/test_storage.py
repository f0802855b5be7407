"""
Tests for storage abstraction and implementations.

Tests the Storage interface contract, the in-memory mock, PostgREST
request shapes, row normalization, and error wrapping.
"""

import pytest
import requests
from unittest.mock import Mock, patch
from datetime import datetime, timedelta

from medpulse.models import Post, SummaryRecord, AnalysisRecord
from medpulse.karma import compute_user_stats, create_activity
from medpulse.storage import (
    Storage,
    StorageError,
    SupabaseStorage,
    MockSupabaseStorage,
    create_storage,
)

from tests.test_config import get_all_sample_posts


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def storage():
    """SupabaseStorage with explicit test credentials."""
    return SupabaseStorage(url="https://test.supabase.co/", api_key="test-key", timeout=5)


def make_response(payload, status=200):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status
    response.json.return_value = payload
    response.content = b"[]" if payload is not None else b""
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


# =============================================================================
# Interface Contract
# =============================================================================

class TestStorageInterface:
    """Tests for the abstract interface."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Storage()

    def test_backends_implement_interface(self, storage):
        assert isinstance(storage, Storage)
        assert isinstance(MockSupabaseStorage(), Storage)

    def test_names(self, storage):
        assert storage.name == "supabase"
        assert str(MockSupabaseStorage()) == "Storage(mock)"

    def test_factory_uses_mock_without_credentials(self):
        with patch("medpulse.storage.supabase.is_store_configured", return_value=False):
            assert isinstance(create_storage(), MockSupabaseStorage)

    def test_factory_uses_supabase_with_credentials(self):
        with patch("medpulse.storage.supabase.is_store_configured", return_value=True):
            assert isinstance(create_storage(), SupabaseStorage)


# =============================================================================
# Mock Storage
# =============================================================================

class TestMockStorage:
    """Tests for MockSupabaseStorage."""

    def test_recent_posts_window_and_order(self):
        now = datetime.now()
        storage = MockSupabaseStorage(posts=[
            Post(id="old", title="old", created_at=now - timedelta(days=10)),
            Post(id="new", title="new", created_at=now - timedelta(hours=1)),
            Post(id="mid", title="mid", created_at=now - timedelta(days=3)),
        ])

        posts = storage.fetch_recent_posts(days=7)
        assert [p.id for p in posts] == ["new", "mid"]

    def test_recent_posts_limit(self, mock_storage):
        assert len(mock_storage.fetch_recent_posts(limit=2)) == 2

    def test_search_scores_query_coverage(self, mock_storage):
        results = mock_storage.search_content("cardiology neurology")

        assert [r.id for r in results] == ["post-2", "post-1"]
        assert results[0].relevance_score == 1.0
        assert results[1].relevance_score == 0.5

    def test_search_other_content_types_empty(self, mock_storage):
        assert mock_storage.search_content("cardiology", "users") == []

    def test_ledger_append_and_filter(self):
        storage = MockSupabaseStorage()
        storage.insert_karma_activity(create_activity("alice", "CREATE_POST"))
        storage.insert_karma_activity(create_activity("bob", "CREATE_COMMENT"))
        storage.insert_karma_activity(create_activity("alice", "CREATE_COMMENT"))

        assert storage.count() == 3
        alice = storage.get_karma_activities(user_id="alice")
        assert [a.activity_type.value for a in alice] == ["CREATE_COMMENT", "CREATE_POST"]
        assert len(storage.get_karma_activities(limit=1)) == 1

    def test_latest_summary(self):
        storage = MockSupabaseStorage()
        storage.save_summary(SummaryRecord("p1", "first.", "m"))
        storage.save_summary(SummaryRecord("p1", "second.", "m"))

        assert storage.get_latest_summary("p1").summary_content == "second."
        assert storage.get_latest_summary("p2") is None

    def test_fail_with_raises_everywhere(self, failing_storage):
        with pytest.raises(StorageError, match="outage"):
            failing_storage.fetch_recent_posts()
        with pytest.raises(StorageError):
            failing_storage.save_analysis(AnalysisRecord("t", "neutral", 0.5))

    def test_clear(self, mock_storage):
        mock_storage.insert_karma_activity(create_activity("a", "CREATE_POST"))
        mock_storage.clear()
        assert mock_storage.count() == 0
        assert mock_storage.fetch_recent_posts() == []


# =============================================================================
# Supabase Storage
# =============================================================================

class TestSupabaseConfig:
    """Tests for configuration handling."""

    def test_trailing_slash_stripped(self, storage):
        assert storage.url == "https://test.supabase.co"

    def test_headers(self, storage):
        assert storage._headers["apikey"] == "test-key"
        assert storage._headers["Authorization"] == "Bearer test-key"

    def test_missing_url_raises(self):
        with pytest.raises(StorageError, match="SUPABASE_URL"):
            SupabaseStorage(url="", api_key="k").fetch_recent_posts()

    def test_missing_key_raises(self):
        with pytest.raises(StorageError, match="SUPABASE_KEY"):
            SupabaseStorage(url="https://x.supabase.co", api_key="").get_karma_activities()


class TestSupabaseReads:
    """Tests for GET-based reads."""

    def test_fetch_recent_posts_request(self, storage):
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response(get_all_sample_posts())

            posts = storage.fetch_recent_posts(days=7, limit=100)

            url = mock_get.call_args[0][0]
            params = mock_get.call_args[1]["params"]
            assert url == "https://test.supabase.co/rest/v1/posts"
            assert params["created_at"].startswith("gte.")
            assert params["order"] == "created_at.desc"
            assert params["limit"] == 100
            assert mock_get.call_args[1]["timeout"] == 5
            assert [p.id for p in posts] == ["post-1", "post-2", "post-3"]

    def test_bad_rows_skipped(self, storage):
        rows = [{"id": "good", "title": "ok"}, {"id": "bad", "upvotes": "many"}]
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response(rows)
            posts = storage.fetch_recent_posts()

        assert [p.id for p in posts] == ["good"]

    def test_karma_activities_filtered_by_user(self, storage):
        rows = [{"id": "k1", "user_id": "alice", "activity_type": "CREATE_POST", "points": 10}]
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response(rows)
            activities = storage.get_karma_activities(user_id="alice", limit=20)

            params = mock_get.call_args[1]["params"]
            assert params["user_id"] == "eq.alice"
            assert params["limit"] == 20
            assert activities[0].points == 10

    def test_unrecognised_activity_type_still_counts(self, storage):
        rows = [
            {"id": "k1", "user_id": "alice", "activity_type": "CREATE_POST", "points": 10},
            {"id": "k2", "user_id": "alice", "activity_type": "ADMIN_BONUS", "points": 50},
        ]
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response(rows)
            activities = storage.get_karma_activities(user_id="alice")

        assert len(activities) == 2
        assert activities[1].type_name == "ADMIN_BONUS"
        assert activities[1].to_dict()["activity_type"] == "ADMIN_BONUS"

        stats = compute_user_stats(activities)
        assert stats.total_karma == 60
        assert stats.rank == "Corporal"
        assert stats.breakdown.post_karma == 10
        assert stats.breakdown.comment_karma == 0
        assert stats.breakdown.vote_karma == 0

    def test_negative_vote_counts_clamped(self, storage):
        rows = [{"id": "p1", "title": "Cardiology update", "upvotes": -3, "downvotes": 2}]
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response(rows)
            posts = storage.fetch_recent_posts()

        assert [p.id for p in posts] == ["p1"]
        assert posts[0].upvotes == 0
        assert posts[0].downvotes == 2

    def test_latest_summary_none_when_empty(self, storage):
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response([])
            assert storage.get_latest_summary("p1") is None

    def test_connection_error_wrapped(self, storage):
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.side_effect = requests.ConnectionError("network down")
            with pytest.raises(StorageError, match="network down"):
                storage.fetch_recent_posts()

    def test_http_error_wrapped(self, storage):
        with patch("medpulse.storage.supabase.requests.get") as mock_get:
            mock_get.return_value = make_response({"message": "nope"}, status=401)
            with pytest.raises(StorageError, match="401"):
                storage.get_karma_activities()


class TestSupabaseWrites:
    """Tests for POST-based writes and the search RPC."""

    def test_search_rpc_payload(self, storage):
        rows = [{"id": "r1", "title": "Cardiac care", "result_type": "post", "relevance_score": 0.8}]
        with patch("medpulse.storage.supabase.requests.post") as mock_post:
            mock_post.return_value = make_response(rows)
            results = storage.search_content("heart cardiac", "posts")

            assert mock_post.call_args[0][0].endswith("/rest/v1/rpc/search_content")
            assert mock_post.call_args[1]["json"] == {
                "search_term": "heart cardiac",
                "content_type": "posts",
            }
            assert results[0].relevance_score == 0.8

    def test_insert_activity_returns_stored_row(self, storage):
        activity = create_activity("alice", "CREATE_POST")
        row = {"id": "db-1", "user_id": "alice", "activity_type": "CREATE_POST", "points": 10}
        with patch("medpulse.storage.supabase.requests.post") as mock_post:
            mock_post.return_value = make_response([row])
            stored = storage.insert_karma_activity(activity)

            payload = mock_post.call_args[1]["json"]
            assert payload["activity_type"] == "CREATE_POST"
            assert payload["points"] == 10
            assert stored.id == "db-1"

    def test_insert_without_representation_returns_input(self, storage):
        activity = create_activity("alice", "CREATE_POST")
        with patch("medpulse.storage.supabase.requests.post") as mock_post:
            mock_post.return_value = make_response(None, status=201)
            assert storage.insert_karma_activity(activity) is activity

    def test_save_summary_payload(self, storage):
        with patch("medpulse.storage.supabase.requests.post") as mock_post:
            mock_post.return_value = make_response([])
            storage.save_summary(SummaryRecord("p1", "Short.", "medical-gpt-v1"))

            assert mock_post.call_args[0][0].endswith("/ai_summaries")
            assert mock_post.call_args[1]["json"]["model_used"] == "medical-gpt-v1"

    def test_write_error_wrapped(self, storage):
        with patch("medpulse.storage.supabase.requests.post") as mock_post:
            mock_post.side_effect = requests.Timeout("timed out")
            with pytest.raises(StorageError):
                storage.save_analysis(AnalysisRecord("t", "neutral", 0.5))
