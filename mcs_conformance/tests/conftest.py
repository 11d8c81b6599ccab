"""Root conftest"""

import signal

import pytest
from pytest_metadata.plugin import metadata_key  # type: ignore

from mcs_conformance.capabilities import has_mcs_api
from mcs_conformance.config import settings
from mcs_conformance.conformance.report import spec_ref_url
from mcs_conformance.polling import PollPolicy
from mcs_conformance.utils import randomize, _whoami


def pytest_addoption(parser):
    """Add options to include various kinds of tests in testrun"""
    parser.addoption(
        "--enforce", action="store_true", default=False, help="Fails tests instead of skip, if capabilities are missing"
    )


def pytest_runtest_setup(item):
    """
    Skip or fail conformance tests if the clusters are not available
    Tests without the conformance mark do not need any cluster and are always run
    """
    if item.get_closest_marker("conformance") is None:
        return
    skip_or_fail = pytest.fail if item.config.getoption("--enforce") else pytest.skip
    available, error = has_mcs_api()
    if not available:
        skip_or_fail(f"Unable to locate Multi-Cluster Services API: {error}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):  # pylint: disable=unused-argument
    """Add specification link to html report"""
    pytest_html = item.config.pluginmanager.getplugin("html")
    outcome = yield
    report = outcome.get_result()
    extras = getattr(report, "extras", [])
    if report.when == "setup" and pytest_html is not None:
        for marker in item.iter_markers(name="spec_ref"):
            extras.append(pytest_html.extras.url(spec_ref_url(marker, settings["spec_ref"]), name="Specification"))
        report.extras = extras


def pytest_report_header(config):
    """Adds configured clusters to pytest header output"""
    names = list(settings.get("cluster_clients", {}).keys())
    config.stash[metadata_key]["Clusters"] = names
    return f"Clusters: {', '.join(names) or 'none'}"


def pytest_collection_modifyitems(session, config, items):  # pylint: disable=unused-argument
    """
    Add user properties to testcases for xml output

    This adds spec_ref property to junit output, utilizes pytest.mark.spec_ref marker.
    Marker without arguments refers to the configured spec_ref.
    """

    for item in items:
        for marker in item.iter_markers(name="spec_ref"):
            item.user_properties.append(("spec_ref", spec_ref_url(marker, settings["spec_ref"])))


@pytest.fixture(scope="session")
def skip_or_fail(request):
    """Skips or fails tests depending on --enforce option"""
    return pytest.fail if request.config.getoption("--enforce") else pytest.skip


@pytest.fixture(scope="session", autouse=True)
def term_handler():
    """
    This will handle ^C, cleanup won't be skipped
    https://github.com/pytest-dev/pytest/issues/9142
    """
    orig = signal.signal(signal.SIGTERM, signal.getsignal(signal.SIGINT))
    yield
    signal.signal(signal.SIGTERM, orig)


@pytest.fixture(scope="session")
def testconfig():
    """Testsuite settings"""
    return settings


@pytest.fixture(scope="session")
def blame(request):
    """Returns function that will add random identifier to the name"""
    if "tester" in settings:
        user = settings["tester"]
    else:
        user = _whoami()

    def _blame(name: str, tail: int = 3) -> str:
        """Create 'scoped' name within given test

        This returns unique name for object(s) to avoid conflicts

        Args:
            :param name: Base name, e.g. 'svc'
            :param tail: length of random suffix"""

        nodename = request.node.name
        if nodename.startswith("test_"):
            nodename = nodename[5:]

        context = nodename.lower().split("_")[0]
        if len(context) > 2:
            context = context[:2] + context[2:-1].translate(str.maketrans("", "", "aiyu")) + context[-1]

        if "." in context:
            context = context.split(".")[0]

        return randomize(f"{name[:8]}-{user[:8]}-{context[:9]}", tail=tail)

    return _blame


@pytest.fixture(scope="session")
def label(blame):
    """Session scope label for all resources"""
    return blame("testrun")


@pytest.fixture(scope="module")
def module_label(label):
    """Module scope label for all resources"""
    return randomize(label)


@pytest.fixture(scope="session")
def poll_policy(testconfig):
    """Timeout and interval used for all eventual expectations"""
    return PollPolicy(timeout=testconfig["polling"]["timeout"], interval=testconfig["polling"]["interval"])
