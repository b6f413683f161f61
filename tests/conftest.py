import pytest

from webauthn_options import Configuration
from webauthn_options.cose import DEFAULT_REGISTRY


def pytest_addoption(parser):
    parser.addoption(
        "--pss",
        action="store",
        choices=("auto", "on", "off"),
        default="auto",
        help="Force the RSA-PSS capability probe instead of asking the backend.",
    )


@pytest.fixture
def pss_probe(request, monkeypatch):
    """Pin the PS256 capability probe of the default registry.

    Tests parametrize this indirectly with True or False. Without a
    parameter the --pss command line option decides.
    """
    if hasattr(request, "param"):
        supported = request.param
    else:
        choice = request.config.getoption("--pss")
        if choice == "auto":
            return DEFAULT_REGISTRY.pss_probe()
        supported = choice == "on"
    monkeypatch.setattr(DEFAULT_REGISTRY, "pss_probe", lambda: supported)
    return supported


@pytest.fixture
def configuration(pss_probe):
    return Configuration()
