# apirule

Data models and controller helpers for `APIRule` resources of the
`gateway.kyma-project.io` API group. The package has no third-party
dependencies.

## What it covers

- `apirule.meta`: `GroupVersion` (its `str()` is `group/version`),
  `ObjectMeta` (name, namespace, generation, labels, annotations, finalizers,
  deletion timestamp) and `ConfigMap`.
- `apirule.v1beta1`: the storage version: `APIRule`, `APIRuleList`,
  `APIRuleSpec` (with the host at spec level), `Service`, `Rule`, `Handler`,
  `Authenticator`, `Mutator`, `StatusCode`, `APIRuleStatus`,
  `APIRuleResourceStatus`, and the JWT configuration types `JwtConfig`,
  `JwtAuthentication` and `JwtAuthorization`.
  `Rule.get_jwt_istio_authorizations()` reads the authorizations from the
  first access strategy's configuration and returns an empty list when there
  is none or it cannot be read. `JwtAuthorization.has_required_scopes()` is
  true when at least one scope is listed.
- `apirule.v1alpha1`: the deprecated version, in which the host sits on the
  service. `APIRule.convert_to(dst)` fills a `v1beta1.APIRule` and moves the
  host to spec level; `APIRule.convert_from(src)` fills the rule from a
  `v1beta1.APIRule` and moves the host into the service. When a conversion
  cannot move the host (no service, no host, or a rule-level service), a
  warning is logged and the rest of the data is still copied; no exception
  is raised.
- `apirule.controller`:
  - `Result`, with `requeue` and `requeue_after`.
  - `done_reconcile_no_requeue()`, `done_reconcile_default_requeue(period)`
    and `done_reconcile_error_requeue(period)`. A zero or missing period falls
    back to 30 minutes and 1 minute respectively.
  - `retry_reconcile(error)` raises `RequeueError`, which carries the error
    and a `Result` with `requeue=True`.
  - `apply_status(api_rule, status, now)` copies the per-resource statuses,
    the generation and the processing time into the rule's status.
  - `ConfigMapPredicate` lets through create, update and generic events for
    APIRules and for the `api-gateway-config` ConfigMap in `kyma-system`.
    Delete events always pass.

Each model can be built from a dict with `from_dict` and turned back into
one with `to_dict`. The dicts use the same field names as the JSON form of
the resource.

## What it does not do

The package holds no cluster client and runs no controller loop. It does not
watch resources, read the gateway ConfigMap, validate APIRules, or create
the virtual services, access rules, request authentications and
authorization policies that an APIRule stands for. It offers no webhook and
no certificate handling. Those parts are left to the code that uses these
models.

## Install

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from apirule import v1alpha1, v1beta1

old = v1alpha1.APIRule.from_dict({
    "metadata": {"name": "httpbin", "namespace": "default"},
    "spec": {
        "service": {"name": "httpbin", "port": 8000, "host": "httpbin.example.com"},
        "gateway": "kyma-system/kyma-gateway",
        "rules": [{
            "path": "/.*",
            "methods": ["GET"],
            "accessStrategies": [{"handler": "noop"}],
        }],
    },
})

new = v1beta1.APIRule()
old.convert_to(new)
assert new.spec.host == "httpbin.example.com"
```

Requeue decisions come from `apirule.controller`:

```python
from datetime import timedelta
from apirule.controller import done_reconcile_default_requeue

result = done_reconcile_default_requeue(timedelta(0))
print(result.requeue_after)   # 0:30:00, the default period
```