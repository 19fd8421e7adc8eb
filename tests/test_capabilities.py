import pytest

from nodeify.exceptions import MissingCollaborator
from nodeify.passes import capabilities
from nodeify.passes.capabilities import capability_statements, inject_capabilities
from nodeify.pipeline import Context

GUARD = 'if(a.b)throw c.d("Can\'t init twice");a.b=!0;'


def test_guard_is_kept_and_assignments_appended():
    source = 'function f(){' + GUARD + 'go()}if(cfgLookup("noPlayer",!1))return;'
    result = inject_capabilities(source)

    expected = (
        'function f(){' + GUARD
        + 'proxyAgent=cfgLookup("proxy",null)?new HttpsProxyAgent(url.parse(cfgLookup("proxy",null))):null;'
        + 'debug=cfgLookup("debug",null)==true;'
        + 'go()}if(cfgLookup("noPlayer",!1))return;'
    )
    assert result == expected


def test_guard_with_whitespace_is_preserved_verbatim():
    guard = 'if ( a.b ) throw c.d ( "Can\'t init twice" ) ; a.b = !0 ;'
    result = inject_capabilities(guard + 'k("noPlayer", 0)')
    assert result.startswith(guard + 'proxyAgent=k("proxy",null)')


def test_lookup_name_is_reused_verbatim():
    statements = capability_statements("Ya")
    assert statements.count('Ya("proxy",null)') == 2
    assert 'debug=Ya("debug",null)==true;' in statements


def test_missing_guard_raises():
    with pytest.raises(MissingCollaborator) as excinfo:
        inject_capabilities('cfg("noPlayer",!1)')
    assert excinfo.value.fingerprint == "initGuard"
    assert excinfo.value.stage == "capabilities"


def test_missing_lookup_raises():
    with pytest.raises(MissingCollaborator) as excinfo:
        inject_capabilities(GUARD + 'cfg("player",!1)')
    assert excinfo.value.fingerprint == "configLookupCall"


def test_run_reports_lookup_name():
    ctx = Context(raw_input=GUARD + 'w("noPlayer",!1);w("noPlayer",!0)')
    metadata = capabilities.run(ctx)

    assert metadata["config_lookup"] == "w"
    assert ctx.report.fingerprint_matches == {"initGuard": 1, "configLookupCall": 2}
    assert ctx.report.warnings == []


def test_run_warns_on_repeated_guard():
    ctx = Context(raw_input=GUARD + GUARD + 'w("noPlayer",!1)')
    capabilities.run(ctx)

    assert ctx.stage_output.count("proxyAgent=") == 1
    assert ctx.report.warnings == [
        "initGuard matched 2 times; only the first occurrence was rewritten"
    ]
