"""Requeue decisions, event filtering and status updates for APIRule reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol

from .meta import ConfigMap
from .v1beta1 import APIRule, APIRuleResourceStatus

CONFIGMAP_NAME = "api-gateway-config"
CONFIGMAP_NS = "kyma-system"
DEFAULT_RECONCILIATION_PERIOD = timedelta(minutes=30)
ERROR_RECONCILIATION_PERIOD = timedelta(minutes=1)
API_GATEWAY_FINALIZER = "gateway.kyma-project.io/subresources"

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """What the controller should do once a reconciliation has finished."""

    requeue: bool = False
    requeue_after: timedelta = timedelta(0)


class RequeueError(Exception):
    """Raised when a reconciliation failed and must be retried right away."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(str(error))
        self.result = Result(requeue=True)
        self.error = error


class ReconciliationStatus(Protocol):
    """Per-resource outcome of one reconciliation."""

    api_rule_status: APIRuleResourceStatus | None
    virtual_service_status: APIRuleResourceStatus | None
    access_rule_status: APIRuleResourceStatus | None
    request_authentication_status: APIRuleResourceStatus | None
    authorization_policy_status: APIRuleResourceStatus | None


def done_reconcile_no_requeue() -> Result:
    """Finish without scheduling another reconciliation."""
    return Result()


def done_reconcile_default_requeue(reconcile_period: timedelta | None) -> Result:
    """Finish and reconcile again after the given period, or the default one."""
    after = reconcile_period if reconcile_period else DEFAULT_RECONCILIATION_PERIOD
    return Result(requeue_after=after)


def done_reconcile_error_requeue(error_reconcile_period: timedelta | None) -> Result:
    """Finish after an error and reconcile again after the given period, or the default one."""
    after = error_reconcile_period if error_reconcile_period else ERROR_RECONCILIATION_PERIOD
    return Result(requeue_after=after)


def retry_reconcile(error: BaseException) -> None:
    """Signal that the reconciliation must be retried because of ``error``."""
    raise RequeueError(error) from error


def apply_status(api_rule: APIRule, status: ReconciliationStatus, now: datetime) -> APIRule:
    """Copy a reconciliation outcome into the APIRule's status and return the rule."""
    target = api_rule.status
    target.observed_generation = api_rule.metadata.generation
    target.last_processed_time = now
    target.api_rule_status = status.api_rule_status
    target.virtual_service_status = status.virtual_service_status
    target.access_rule_status = status.access_rule_status
    target.request_authentication_status = status.request_authentication_status
    target.authorization_policy_status = status.authorization_policy_status
    return api_rule


@dataclass
class ConfigMapPredicate:
    """Lets through events for APIRules and for the gateway's own ConfigMap."""

    log: logging.Logger = field(default=_log)

    def create(self, obj: Any) -> bool:
        return self.generic(obj)

    def delete(self, obj: Any) -> bool:
        # Deletions are never filtered out.
        return True

    def update(self, old: Any, new: Any) -> bool:
        return self.generic(new)

    def generic(self, obj: Any) -> bool:
        if obj is None:
            self.log.error("Generic event has no object")
            return False
        if isinstance(obj, APIRule):
            return True
        return (
            isinstance(obj, ConfigMap)
            and obj.metadata.namespace == CONFIGMAP_NS
            and obj.metadata.name == CONFIGMAP_NAME
        )