"""Module which initializes Dynaconf"""

from dynaconf import Dynaconf, Validator

from mcs_conformance.conformance.driver import SPEC_REF


def create_validators() -> list[Validator]:
    """Returns new set of validators for the testsuite settings"""
    return [
        Validator("clusters", must_exist=True, len_min=1, messages={"operations": "At least one cluster is required"}),
        Validator("project", default="mcs-conformance", ne=None),
        Validator("polling.timeout", default=20, gt=0),
        Validator("polling.interval", default=1, gt=0),
        Validator(
            "polling",
            condition=lambda polling: polling["interval"] <= polling["timeout"],
            messages={"condition": "Polling interval must not be longer than polling timeout"},
        ),
        Validator("service.name", default="hello", ne=None),
        Validator("service.port", default=42, gte=1, lte=65535, cast=int),
        Validator("service.image", default="registry.k8s.io/e2e-test-images/agnhost:2.47"),
        Validator("request_pod.image", default="registry.k8s.io/e2e-test-images/jessie-dnsutils:1.7"),
        Validator("spec_ref", default=SPEC_REF, startswith="http"),
    ]


settings = Dynaconf(
    environments=True,
    lowercase_read=True,
    load_dotenv=True,
    settings_files=["config/settings.yaml", "config/settings.local.yaml", "config/secrets.yaml"],
    envvar_prefix="MCS",
    merge_enabled=True,
    validators=create_validators(),
    validate_only=["project", "polling", "service", "request_pod", "spec_ref"],
    loaders=["dynaconf.loaders.env_loader", "mcs_conformance.config.cluster_loader"],
)
