from helperbot.scanner import scan_references


def _numbers(text: str, limit: int = 5) -> list[int]:
    return [candidate.number for candidate in scan_references(text, limit=limit)]


def test_scan_extracts_references_in_document_order() -> None:
    candidates = scan_references("see ##12 and ##7, also ##300")

    assert [c.number for c in candidates] == [12, 7, 300]
    assert [c.position for c in candidates] == [0, 1, 2]


def test_scan_without_matches_returns_empty() -> None:
    assert scan_references("") == []
    assert scan_references("plain #12 single hash and ## spaced 4") == []


def test_scan_caps_batch_at_five() -> None:
    text = " ".join(f"##{n}" for n in range(1, 9))

    assert _numbers(text) == [1, 2, 3, 4, 5]


def test_scan_respects_custom_limit() -> None:
    assert _numbers("##1 ##2 ##3", limit=2) == [1, 2]
    assert _numbers("##1 ##2 ##3", limit=0) == []


def test_scan_digit_length_boundary() -> None:
    assert _numbers("##0") == [0]
    assert _numbers("##1234567890") == [1234567890]
    assert _numbers("##12345678901") == []


def test_scan_ignores_non_ascii_digits() -> None:
    assert _numbers("##١٢") == []


def test_scan_matches_are_non_overlapping() -> None:
    assert _numbers("###5 ####6 ##7##8") == [5, 6, 7, 8]


def test_scan_is_deterministic() -> None:
    text = "fixes ##10, refs ##11 ##10"

    assert scan_references(text) == scan_references(text)
    assert _numbers(text) == [10, 11, 10]


def test_scan_limit_never_exceeds_five() -> None:
    text = " ".join(f"##{n}" for n in range(1, 9))

    assert _numbers(text, limit=8) == [1, 2, 3, 4, 5]
