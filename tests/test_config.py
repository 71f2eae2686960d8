"""Tests for building the cache configuration."""

from __future__ import annotations

from datetime import timedelta

from timetable.config import CACHE_TTL, CacheConfig


class TestCacheConfig:
    def test_defaults(self) -> None:
        config = CacheConfig()
        assert config.collection == "cache"
        assert config.ttl == timedelta(minutes=30) == CACHE_TTL
        assert config.disabled is False

    def test_from_env(self) -> None:
        config = CacheConfig.from_env(
            {"MONGO_URI": "mongodb://db:27017", "TIMETABLE_DB": "tt", "TIMETABLE_ENV": "production"}
        )
        assert config.mongo_uri == "mongodb://db:27017"
        assert config.database == "tt"
        assert config.disabled is False

    def test_from_env_defaults(self) -> None:
        config = CacheConfig.from_env({})
        assert config.mongo_uri == "mongodb://localhost:27017"
        assert config.database == "timetable"
        assert config.disabled is False

    def test_test_mode_disables(self) -> None:
        assert CacheConfig.from_env({"TIMETABLE_ENV": "test"}).disabled is True
        assert CacheConfig.from_env({"RACK_ENV": "Test"}).disabled is True

    def test_timetable_env_wins(self) -> None:
        config = CacheConfig.from_env({"TIMETABLE_ENV": "development", "RACK_ENV": "test"})
        assert config.disabled is False

    def test_ttl_overridable(self) -> None:
        assert CacheConfig(ttl=timedelta(minutes=5)).ttl == timedelta(minutes=5)
