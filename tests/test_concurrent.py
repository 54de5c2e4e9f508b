"""Tests that concurrent resolutions and creations keep the store consistent."""

from concurrent.futures import ThreadPoolExecutor

from shortlinks.services import ResolutionEngine, ShorteningEngine


def test_concurrent_resolutions_lose_no_visits(test_db):
    code = ShorteningEngine(test_db).shorten("https://hot.example.com")
    resolver = ResolutionEngine(test_db)
    concurrency = 50

    with ThreadPoolExecutor(max_workers=10) as pool:
        results = list(pool.map(lambda _: resolver.resolve(code), range(concurrency)))

    assert results == ["https://hot.example.com"] * concurrency
    assert test_db.find_by_code(code)["visit_count"] == concurrency


def test_concurrent_custom_code_claims(test_db):
    """Only one of many simultaneous claims on a custom code wins."""
    engine = ShorteningEngine(test_db)
    outcomes = []

    def claim(i):
        try:
            engine.shorten(f"https://example.com/{i}", custom_code="contested")
            outcomes.append("created")
        except Exception as e:
            outcomes.append(type(e).__name__)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(claim, range(20)))

    assert outcomes.count("created") == 1
    assert outcomes.count("CodeConflict") == 19


def test_concurrent_generated_codes_are_unique(test_db):
    engine = ShorteningEngine(test_db, dedup=False)

    with ThreadPoolExecutor(max_workers=8) as pool:
        codes = list(pool.map(lambda i: engine.shorten(f"https://example.com/{i}"), range(40)))

    assert len(set(codes)) == 40
