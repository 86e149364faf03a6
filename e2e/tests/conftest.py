from datetime import datetime
from pathlib import Path

import pytest

from smoke.core.artifacts import safe_name
from smoke.core.config import load_settings
from smoke.core.error_log import ErrorLog
from smoke.core.playwright_factory import close_context, create_context
from smoke.flows.harness import SmokeHarness

from fakes import FakePage

E2E_DIR = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def settings():
    return load_settings(E2E_DIR)


@pytest.fixture(scope="session")
def pw_bundle(settings):
    bundle = create_context(settings)
    yield bundle
    close_context(bundle)


@pytest.fixture(scope="session")
def artifacts_base_dir(settings):
    base = settings.artifact_dir
    base.mkdir(parents=True, exist_ok=True)
    return base


@pytest.fixture()
def page(pw_bundle):
    """
    A new tab per scenario. The context (and its cookies) is shared, which
    is why the harness resets the session before every scenario.
    """
    p = pw_bundle.context.new_page()
    yield p
    p.close()


@pytest.fixture()
def tracing(request, pw_bundle, settings, artifacts_base_dir):
    """One trace chunk per scenario, saved next to its failure artifacts."""
    if not settings.trace:
        yield None
        return

    scenario_id = None
    callspec = getattr(request.node, "callspec", None)
    if callspec is not None:
        scenario_id = callspec.params.get("scenario_file")

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    name = safe_name(scenario_id or request.node.name)
    out_dir = artifacts_base_dir / name
    out_dir.mkdir(parents=True, exist_ok=True)
    trace_path = out_dir / f"trace_{name}_{ts}.zip"

    pw_bundle.context.tracing.start_chunk(title=name)
    yield trace_path
    pw_bundle.context.tracing.stop_chunk(path=str(trace_path))


@pytest.fixture()
def harness(settings, page, artifacts_base_dir, tracing):
    return SmokeHarness(
        settings,
        page,
        error_log=ErrorLog(settings.error_log_path),
        artifacts_base_dir=artifacts_base_dir,
    )


@pytest.fixture()
def fake_page():
    return FakePage()
