from nodeify.passes.hash_extract import LEADING_WINDOW, UNKNOWN_HASH, extract_hash, run
from nodeify.pipeline import Context

from conftest import SAMPLE_HASH


def test_extracts_hash_from_leading_comment(headless_source):
    assert extract_hash(headless_source) == SAMPLE_HASH


def test_missing_comment_returns_sentinel():
    assert extract_hash('var a="deadbeef";') == UNKNOWN_HASH


def test_hash_after_comment_terminator_is_ignored():
    source = "/* HaxBall */\nvar build=\"0badcafe\";"
    assert extract_hash(source) == UNKNOWN_HASH


def test_uppercase_and_longer_tokens_are_not_hashes():
    assert extract_hash("/* DEADBEEF 0123456789 */") == UNKNOWN_HASH
    assert extract_hash("/* 0123456789 cafe1234 */") == "cafe1234"


def test_unterminated_comment_uses_bounded_window():
    inside = "/*" + " " * 10 + "abcdef01"
    assert extract_hash(inside) == "abcdef01"
    beyond = "/*" + " " * LEADING_WINDOW + "abcdef01"
    assert extract_hash(beyond) == UNKNOWN_HASH


def test_run_records_hash_on_context(headless_source):
    ctx = Context(raw_input=headless_source)
    metadata = run(ctx)

    assert metadata == {"hash": SAMPLE_HASH, "found": True}
    assert ctx.extracted_hash == SAMPLE_HASH
    assert ctx.report.source_hash == SAMPLE_HASH
    assert ctx.stage_output == headless_source


def test_comment_after_code_is_not_leading():
    assert extract_hash('var a=1;/* Build: abcdef01 */') == UNKNOWN_HASH


def test_whitespace_and_bom_before_comment_are_skipped():
    assert extract_hash("\ufeff\n\t  /* Build: abcdef01 */\nvar a;") == "abcdef01"


def test_unterminated_window_counts_from_comment_start():
    source = "\n" * (LEADING_WINDOW * 2) + "/* Build: abcdef01"
    assert extract_hash(source) == "abcdef01"
