import textwrap

from nodeify.report import NodeifyReport


def test_report_to_text_includes_expected_sections():
    report = NodeifyReport(
        source_hash="6a1f3c2e",
        input_path="scripts/headless-min.js",
        output_path="src/build.js",
        input_length=100,
        output_length=900,
        fingerprint_matches={"webSocketConstruction": 2, "captchaCase": 1},
        stripped={"window.": 3},
        warnings=["webSocketConstruction matched 2 times"],
    )

    expected = textwrap.dedent(
        """
        Source hash: 6a1f3c2e
        Input: scripts/headless-min.js (100 chars)
        Output: src/build.js (900 chars)
        Fingerprint matches:
          captchaCase: 1
          webSocketConstruction: 2
        Stripped browser references:
          window.: 3
        Warnings:
          - webSocketConstruction matched 2 times
        """
    ).strip()
    assert report.to_text() == expected


def test_empty_report_text():
    assert NodeifyReport().to_text() == "Source hash: unknown\nFingerprint matches:\n  none"


def test_to_json_flags_failures():
    report = NodeifyReport(errors=["rewrite: failed to find captchaCase pattern"])
    data = report.to_json()

    assert data["succeeded"] is False
    assert data["errors"] == ["rewrite: failed to find captchaCase pattern"]
    assert data["source_hash"] == "unknown"
