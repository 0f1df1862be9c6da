import logging

from apirule import v1beta1
from apirule.meta import ObjectMeta
from apirule.v1alpha1 import (
    GROUP_VERSION,
    APIRule,
    APIRuleList,
    APIRuleResourceStatus,
    APIRuleSpec,
    APIRuleStatus,
    Authenticator,
    Mutator,
    Rule,
    Service,
    StatusCode,
)


def _alpha(host="some-host"):
    return APIRule(
        metadata=ObjectMeta(name="rule", namespace="ns", generation=2),
        spec=APIRuleSpec(
            service=Service(name="httpbin", port=443, host=host),
            gateway="kyma-system/kyma-gateway",
            rules=[
                Rule(
                    path="/img",
                    methods=["GET"],
                    access_strategies=[Authenticator(name="noop")],
                    mutators=[Mutator(name="idToken")],
                )
            ],
        ),
        status=APIRuleStatus(api_rule_status=APIRuleResourceStatus(code=StatusCode.OK)),
    )


def _beta(host="some-host", service=True, rule_service=None):
    return v1beta1.APIRule(
        metadata=ObjectMeta(name="rule", namespace="ns"),
        spec=v1beta1.APIRuleSpec(
            host=host,
            service=v1beta1.Service(name="httpbin", port=443) if service else None,
            gateway="kyma-system/kyma-gateway",
            rules=[
                v1beta1.Rule(
                    path="/img",
                    methods=["GET"],
                    access_strategies=[v1beta1.Authenticator(name="noop")],
                    service=rule_service,
                )
            ],
        ),
    )


def test_convert_to_moves_host_to_spec_level():
    host = "some-host"
    alpha = APIRule(spec=APIRuleSpec(service=Service(host=host)))
    beta = v1beta1.APIRule()
    alpha.convert_to(beta)
    assert beta.spec.host == alpha.spec.service.host


def test_convert_to_with_nil_host():
    alpha = APIRule(spec=APIRuleSpec(service=Service(host=None)))
    beta = v1beta1.APIRule()
    alpha.convert_to(beta)
    assert beta.spec.host is None
    assert beta.spec.service == v1beta1.Service()


def test_convert_to_with_nil_service(caplog):
    alpha = APIRule(spec=APIRuleSpec(service=None))
    beta = v1beta1.APIRule()
    with caplog.at_level(logging.WARNING):
        alpha.convert_to(beta)
    assert beta.spec.host is None
    assert beta.spec.service is None
    assert "wasn't possible" in caplog.text


def test_convert_to_of_empty_rule_leaves_service_unset():
    alpha = APIRule()
    beta = v1beta1.APIRule(spec=v1beta1.APIRuleSpec(host=None))
    alpha.convert_to(beta)
    assert alpha.spec.service is None
    assert beta.spec.host is None


def test_convert_to_copies_everything_else():
    alpha = _alpha()
    beta = v1beta1.APIRule()
    alpha.convert_to(beta)
    assert beta.metadata == alpha.metadata
    assert beta.metadata is not alpha.metadata
    assert beta.spec.service == v1beta1.Service(name="httpbin", port=443)
    assert beta.spec.gateway == "kyma-system/kyma-gateway"
    assert beta.spec.rules[0].mutators == [v1beta1.Mutator(name="idToken")]
    assert beta.status.api_rule_status.code is StatusCode.OK


def test_convert_from_moves_host_to_service_level():
    beta = _beta(host="some-host")
    alpha = APIRule()
    alpha.convert_from(beta)
    assert alpha.spec.service.host == beta.spec.host
    assert alpha.spec.service.name == "httpbin"


def test_convert_from_without_service():
    beta = _beta(service=False)
    alpha = APIRule()
    alpha.convert_from(beta)
    assert alpha.spec.service is None


def test_convert_from_with_rule_level_service():
    beta = _beta(rule_service=v1beta1.Service(name="other", port=80))
    alpha = APIRule()
    alpha.convert_from(beta)
    assert alpha.spec.service.host is None


def test_convert_from_with_nil_host():
    beta = _beta(host=None)
    alpha = APIRule()
    alpha.convert_from(beta)
    assert alpha.spec.service.host is None


def test_conversion_round_trip_keeps_spec():
    alpha = _alpha()
    beta = v1beta1.APIRule()
    alpha.convert_to(beta)
    restored = APIRule()
    restored.convert_from(beta)
    assert restored.spec == alpha.spec
    assert restored.metadata == alpha.metadata


def test_service_includes_host_key():
    assert Service(name="a", port=1, host="h").to_dict() == {"name": "a", "port": 1, "host": "h"}


def test_api_rule_round_trip():
    alpha = _alpha()
    assert alpha.api_version == str(GROUP_VERSION)
    assert APIRule.from_dict(alpha.to_dict()) == alpha


def test_status_from_dict_keeps_class():
    status = APIRuleStatus.from_dict({"APIRuleStatus": {"code": "ERROR"}})
    assert isinstance(status, APIRuleStatus)
    assert status.api_rule_status.code is StatusCode.ERROR


def test_api_rule_list_round_trip():
    rules = APIRuleList(items=[_alpha(), _alpha(host=None)])
    assert APIRuleList.from_dict(rules.to_dict()) == rules