from surveyapp.core.cache_keys import CacheKeys, CacheSettings, Statistic, StatisticTTLs


def test_keys_are_namespaced_and_versioned():
    keys = CacheKeys()

    assert keys.total_count == "survey:total-count:v1"
    assert keys.rating_averages == "survey:rating-avg:v1"
    assert keys.food_distribution == "survey:food-dist:v1"
    assert keys.age_statistics == "survey:age-stats:v1"
    assert keys.pattern() == "survey:*"


def test_bumping_version_changes_every_key():
    old, new = CacheKeys(version=1), CacheKeys(version=2)

    assert set(old.all()).isdisjoint(new.all())
    assert new.key(Statistic.RATING_AVERAGES) == "survey:rating-avg:v2"


def test_total_count_lives_shorter_than_derived_statistics():
    ttls = StatisticTTLs()

    assert ttls.for_statistic(Statistic.TOTAL_COUNT) == 120
    for statistic in (Statistic.RATING_AVERAGES, Statistic.FOOD_DISTRIBUTION, Statistic.AGE_STATISTICS):
        assert ttls.for_statistic(statistic) == 300


def test_default_cache_settings():
    settings = CacheSettings()

    assert settings.default_ttl_seconds == 300
    assert settings.max_local_entries == 1000
    assert settings.local_check_period_seconds == 600
    assert len(settings.keys.all()) == 4
