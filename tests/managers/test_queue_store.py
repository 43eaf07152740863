from concurrent.futures import ThreadPoolExecutor

import pytest

from linkdump.errors import BlankSentinel, EmptyLink, ValidationError
from linkdump.managers.queue_store import LinkQueue, normalize_link


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", " \r\n "])
def test_submit_rejects_blank_input(queue, raw):
    with pytest.raises(EmptyLink):
        queue.submit(raw)
    assert queue.size() == 0


@pytest.mark.parametrize("raw", ["about:blank", "  about:blank\n"])
def test_submit_rejects_about_blank(queue, raw):
    with pytest.raises(BlankSentinel):
        queue.submit(raw)
    assert queue.size() == 0


def test_validation_errors_are_value_errors():
    assert issubclass(EmptyLink, ValidationError)
    assert issubclass(BlankSentinel, ValueError)


def test_sentinel_match_is_exact():
    assert normalize_link("about:blank#x") == "about:blank#x"
    assert normalize_link("ABOUT:BLANK") == "ABOUT:BLANK"


def test_submit_trims_and_returns_one_based_positions(queue):
    assert queue.submit("  https://a.example \n") == 1
    assert queue.submit("https://b.example") == 2
    assert queue.snapshot() == ("https://a.example", "https://b.example")
    assert len(queue) == 2


def test_listing_is_one_based_and_does_not_mutate(queue):
    queue.submit("a")
    queue.submit("b")

    assert list(queue.listing()) == [(1, "a"), (2, "b")]
    assert list(queue.listing()) == [(1, "a"), (2, "b")]
    assert queue.size() == 2


def test_listing_of_empty_queue_is_empty(queue):
    assert list(queue.listing()) == []


def test_listing_uses_snapshot_taken_when_called(queue):
    queue.submit("a")
    items = queue.listing()
    queue.submit("b")
    assert list(items) == [(1, "a")]


def test_clear_empties_queue(queue):
    queue.submit("a")
    queue.clear()
    assert queue.size() == 0
    assert queue.submit("b") == 1


def test_commit_drops_only_the_prefix(queue):
    for link in ("a", "b", "c"):
        queue.submit(link)

    assert queue.commit(2) == 1
    assert queue.snapshot() == ("c",)


def test_commit_rejects_negative_count(queue):
    with pytest.raises(ValueError):
        queue.commit(-1)


def test_concurrent_submits_get_distinct_positions():
    queue = LinkQueue()
    links = [f"https://example.org/{i}" for i in range(200)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        positions = list(pool.map(queue.submit, links))

    assert sorted(positions) == list(range(1, len(links) + 1))
    assert queue.size() == len(links)
    assert sorted(queue.snapshot()) == sorted(links)
    # position handed back matches where the link actually landed
    snap = queue.snapshot()
    for link, pos in zip(links, positions):
        assert snap[pos - 1] == link
