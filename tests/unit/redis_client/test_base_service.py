"""Tests for RedisBaseService serialization."""

from datetime import datetime, timezone

import pytest

from redis_toolkit.errors import DeserializationError
from redis_toolkit.models import ToolkitBaseModel
from redis_toolkit.redis_client import deserialize, serialize


class Profile(ToolkitBaseModel):
    user_id: int
    name: str
    tags: list[str] = []


@pytest.fixture
def profile(sample_profile_data) -> Profile:
    return Profile(**sample_profile_data)


class TestSerialize:
    def test_none_becomes_empty_string(self):
        assert serialize(None) == ""

    def test_string_stored_verbatim(self):
        assert serialize("plain text") == "plain text"

    def test_model(self, profile):
        assert serialize(profile) == profile.model_dump_json()

    def test_nested_models_and_datetimes(self, profile):
        stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        raw = serialize({"profile": profile, "at": stamp, "ids": [1, 2]})

        assert '"name":"ada"' in raw
        assert '"at":"2024-01-02T03:04:05Z"' in raw

    def test_deserialize_string_target_returns_raw(self):
        assert deserialize("k", "not json", str) == "not json"

    def test_deserialize_empty(self):
        assert deserialize("k", "", Profile) is None
        assert deserialize("k", None, int) is None


class TestValue:
    async def test_model_round_trip(self, service, profile):
        await service.set_for_value("profile:7", profile)

        assert await service.get_for_value("profile:7", Profile) == profile

    async def test_raw_read_without_target(self, service):
        await service.set_for_value("k", {"a": 1})

        assert await service.get_for_value("k") == '{"a":1}'

    async def test_none_stored_as_empty(self, service, cache):
        await service.set_for_value("k", None)

        assert await cache.get_for_value("k") == ""
        assert await service.get_for_value("k", Profile) is None

    async def test_missing_key(self, service):
        assert await service.get_for_value("missing", Profile) is None

    async def test_ttl(self, service, cache):
        await service.set_for_value_ttl("k", [1, 2, 3], 90)

        assert await service.get_for_value("k", list[int]) == [1, 2, 3]
        assert 60 < await cache.get_ttl("k") <= 90

    async def test_expire_defaults_to_client_ttl(self, service, cache):
        await service.set_for_value("k", "v")

        assert await service.expire("k") is True
        assert 0 < await cache.get_ttl("k") <= 60

    async def test_list_for_value(self, service, profile):
        await service.set_for_value("profiles", [profile, profile])

        assert await service.list_for_value("profiles", Profile) == [profile, profile]
        assert await service.list_for_value("missing", Profile) == []

    async def test_increment(self, service):
        assert await service.increment_for_value("n", 3) == 3

    async def test_invalid_payload_raises(self, service, cache):
        await cache.set_for_value("k", '{"user_id": "not-a-number"}')

        with pytest.raises(DeserializationError) as exc_info:
            await service.get_for_value("k", Profile)

        assert exc_info.value.key == "k"
        assert exc_info.value.target is Profile


class TestHash:
    async def test_put_and_get(self, service, profile):
        await service.put_for_hash("profiles", "7", profile)

        assert await service.get_for_hash("profiles", "7", Profile) == profile
        assert await service.get_for_hash("profiles", "8", Profile) is None

    async def test_multi_get_keeps_positions(self, service, profile):
        await service.multi_put_for_hash("profiles", {"7": profile, "9": None})

        result = await service.multi_get_for_hash("profiles", ["7", "8", "9"], Profile)

        assert result == [profile, None, None]

    async def test_values_and_entries(self, service):
        await service.multi_put_for_hash("scores", {"a": 1, "b": 2})

        assert sorted(await service.values_for_hash("scores", int)) == [1, 2]
        assert await service.entries_for_hash("scores", int) == {"a": 1, "b": 2}
        assert await service.entries_for_hash("scores") == {"a": "1", "b": "2"}
        assert await service.keys_for_hash("scores") == {"a", "b"}

    async def test_entries_missing_key(self, service):
        assert await service.entries_for_hash("missing", Profile) == {}


class TestList:
    async def test_push_pop(self, service, profile):
        other = profile.model_copy(update={"user_id": 8})
        await service.right_push_for_list("queue", profile)
        await service.right_push_for_list("queue", other)

        assert await service.left_pop_for_list("queue", Profile) == profile
        assert await service.right_pop_for_list("queue", Profile) == other
        assert await service.left_pop_for_list("queue", Profile) is None

    async def test_range(self, service):
        await service.left_push_for_list("nums", 2)
        await service.left_push_for_list("nums", 1)

        assert await service.range_for_list("nums", target=int) == [1, 2]
        assert await service.range_for_list("nums") == ["1", "2"]


class TestSet:
    async def test_members(self, service):
        await service.add_for_set("ids", 1, 2, 2, 3)

        assert sorted(await service.members_for_set("ids", int)) == [1, 2, 3]
        assert await service.members_for_set("ids") == {"1", "2", "3"}

    async def test_pop_single_and_many(self, service):
        await service.add_for_set("ids", 1, 2, 3)

        single = await service.pop_for_set("ids", target=int)
        rest = await service.pop_for_set("ids", 10, int)

        assert sorted(rest + [single]) == [1, 2, 3]
        assert await service.pop_for_set("ids", 10, int) == []
        assert await service.pop_for_set("ids") is None
