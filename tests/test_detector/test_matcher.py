"""Tests for the near-duplicate matcher."""

import pytest

from dupsweep.common.exceptions import ConfigError
from dupsweep.detector.matcher import NearDuplicateMatcher
from dupsweep.detector.models import FileDescriptor, SimilarMatch


def _indexed(matcher: NearDuplicateMatcher, path: str, content: bytes) -> FileDescriptor:
    file = FileDescriptor(path=path, size=len(content))
    matcher.register(file, matcher.profile(content))
    return file


def test_reports_similar_pair(near_texts: tuple[str, str]) -> None:
    """Test a pair above the threshold is reported with the earlier file first."""
    base, near = near_texts
    matcher = NearDuplicateMatcher(similarity_threshold=0.9)
    earlier = _indexed(matcher, "/e.txt", base.encode())
    new = FileDescriptor("/f.txt", len(near))

    matches = matcher.match(new, matcher.profile(near.encode()), [earlier])

    assert len(matches) == 1
    assert matches[0].file_a == "/e.txt"
    assert matches[0].file_b == "/f.txt"
    assert matches[0].similarity == pytest.approx(0.95)


def test_below_threshold_not_reported(near_texts: tuple[str, str]) -> None:
    """Test a pair under the threshold is dropped."""
    base, near = near_texts
    matcher = NearDuplicateMatcher(similarity_threshold=0.96)
    earlier = _indexed(matcher, "/e.txt", base.encode())

    assert matcher.match(
        FileDescriptor("/f.txt", len(near)), matcher.profile(near.encode()), [earlier]
    ) == []


def test_size_gate_skips_comparison() -> None:
    """Test files outside the size gate are never compared."""
    matcher = NearDuplicateMatcher()
    earlier = _indexed(matcher, "/c.txt", b"a" * 500)
    new = FileDescriptor("/d.txt", 1000)

    assert matcher.match(new, matcher.profile(b"a" * 1000), [earlier]) == []
    assert matcher.comparisons == 0


def test_size_gate_is_tunable() -> None:
    """Test the same pair is reported once the gate is widened."""
    text = "".join(f"{i:03d}," for i in range(25)).encode()
    longer = text + b",extra text!"
    assert (len(text), len(longer)) == (100, 112)

    narrow = NearDuplicateMatcher(size_threshold=0.1)
    earlier = _indexed(narrow, "/a.txt", text)
    new = FileDescriptor("/b.txt", len(longer))
    assert narrow.match(new, narrow.profile(longer), [earlier]) == []

    wide = NearDuplicateMatcher(size_threshold=0.2)
    earlier = _indexed(wide, "/a.txt", text)
    matches = wide.match(new, wide.profile(longer), [earlier])
    assert len(matches) == 1
    assert matches[0].similarity == pytest.approx(198 / 210)


def test_identical_text_is_not_similar() -> None:
    """Test a score of exactly 1 is left to exact matching."""
    matcher = NearDuplicateMatcher(similarity_threshold=0.5)
    earlier = _indexed(matcher, "/a.txt", b"same text")

    assert matcher.match(
        FileDescriptor("/b.txt", 9), matcher.profile(b"same text"), [earlier]
    ) == []


def test_never_compares_with_itself() -> None:
    """Test a file listed among its own candidates is ignored."""
    matcher = NearDuplicateMatcher(similarity_threshold=0.0)
    file = _indexed(matcher, "/a.txt", b"some text")

    assert matcher.match(file, matcher.profile(b"some text"), [file]) == []
    assert matcher.comparisons == 0


def test_reports_every_candidate(near_texts: tuple[str, str]) -> None:
    """Test matching is exhaustive rather than best-match only."""
    base, near = near_texts
    matcher = NearDuplicateMatcher(similarity_threshold=0.85)
    first = _indexed(matcher, "/1.txt", base.encode())
    second = _indexed(matcher, "/2.txt", (base[:5] + "#" + base[6:]).encode())

    matches = matcher.match(
        FileDescriptor("/3.txt", len(near)), matcher.profile(near.encode()), [first, second]
    )

    assert [m.file_a for m in matches] == ["/1.txt", "/2.txt"]
    assert all(isinstance(m, SimilarMatch) for m in matches)


def test_binary_content_has_no_similarity() -> None:
    """Test undecodable content on either side yields no pair."""
    matcher = NearDuplicateMatcher(similarity_threshold=0.0)
    binary = b"\xff\xfe" + b"abcdefgh"
    earlier = _indexed(matcher, "/bin.dat", binary)

    assert matcher.profile(binary) is None
    assert matcher.match(
        FileDescriptor("/text.txt", 10), matcher.profile(b"abcdefghij"), [earlier]
    ) == []
    assert matcher.match(FileDescriptor("/other.dat", 10), None, [earlier]) == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"similarity_threshold": 1.5},
        {"similarity_threshold": -0.1},
        {"size_threshold": 2.0},
    ],
)
def test_rejects_invalid_thresholds(kwargs: dict[str, float]) -> None:
    """Test thresholds must lie in [0, 1]."""
    with pytest.raises(ConfigError):
        NearDuplicateMatcher(**kwargs)
