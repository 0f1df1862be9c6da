"""The deprecated v1alpha1 APIRule resource and its conversion to v1beta1."""

from __future__ import annotations

import copy
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any

from . import v1beta1
from .meta import V1ALPHA1, ObjectMeta
from .v1beta1 import APIRuleResourceStatus, Authenticator, Handler, Mutator, StatusCode

__all__ = [
    "GROUP_VERSION",
    "APIRule",
    "APIRuleList",
    "APIRuleResourceStatus",
    "APIRuleSpec",
    "APIRuleStatus",
    "Authenticator",
    "Handler",
    "Mutator",
    "Rule",
    "Service",
    "StatusCode",
]

GROUP_VERSION = V1ALPHA1
KIND = v1beta1.KIND
LIST_KIND = v1beta1.LIST_KIND

_log = logging.getLogger(__name__)


@dataclass
class Service:
    """The service to expose, together with the host it is exposed on."""

    name: str | None = None
    port: int | None = None
    host: str | None = None
    is_external: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "port": self.port, "host": self.host}
        if self.is_external is not None:
            out["external"] = self.is_external
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Service:
        return cls(
            name=data.get("name"),
            port=data.get("port"),
            host=data.get("host"),
            is_external=data.get("external"),
        )


@dataclass
class Rule:
    """Access rules for one path."""

    path: str = ""
    methods: list[str] = field(default_factory=list)
    access_strategies: list[Authenticator] = field(default_factory=list)
    mutators: list[Mutator] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "path": self.path,
            "methods": list(self.methods),
            "accessStrategies": [a.to_dict() for a in self.access_strategies],
        }
        if self.mutators:
            out["mutators"] = [m.to_dict() for m in self.mutators]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rule:
        return cls(
            path=data.get("path", ""),
            methods=list(data.get("methods") or []),
            access_strategies=[
                Authenticator.from_dict(a) for a in data.get("accessStrategies") or []
            ],
            mutators=[Mutator.from_dict(m) for m in data.get("mutators") or []],
        )


@dataclass
class APIRuleSpec:
    """Desired state of an APIRule."""

    service: Service | None = None
    gateway: str | None = None
    rules: list[Rule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "service": None if self.service is None else self.service.to_dict(),
            "gateway": self.gateway,
            "rules": [r.to_dict() for r in self.rules],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIRuleSpec:
        service = data.get("service")
        return cls(
            service=None if service is None else Service.from_dict(service),
            gateway=data.get("gateway"),
            rules=[Rule.from_dict(r) for r in data.get("rules") or []],
        )


class APIRuleStatus(v1beta1.APIRuleStatus):
    """Observed state of an APIRule."""

    def to_dict(self) -> dict[str, Any]:
        return super().to_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIRuleStatus:
        base = v1beta1.APIRuleStatus.from_dict(data)
        return cls(**{f.name: getattr(base, f.name) for f in dataclasses.fields(base)})


@dataclass
class APIRule:
    """An APIRule in the deprecated v1alpha1 form."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: APIRuleSpec = field(default_factory=APIRuleSpec)
    status: APIRuleStatus = field(default_factory=APIRuleStatus)
    api_version: str = str(GROUP_VERSION)
    kind: str = KIND

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.api_version:
            out["apiVersion"] = self.api_version
        if self.kind:
            out["kind"] = self.kind
        out["metadata"] = self.metadata.to_dict()
        out["spec"] = self.spec.to_dict()
        out["status"] = self.status.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIRule:
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata") or {}),
            spec=APIRuleSpec.from_dict(data.get("spec") or {}),
            status=APIRuleStatus.from_dict(data.get("status") or {}),
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
        )

    def convert_to(self, dst: v1beta1.APIRule) -> None:
        """Fill a v1beta1 APIRule from this one, moving the host to spec level."""
        dst.spec = v1beta1.APIRuleSpec.from_dict(self.spec.to_dict())
        dst.status = v1beta1.APIRuleStatus.from_dict(self.status.to_dict())
        dst.metadata = copy.deepcopy(self.metadata)

        service = self.spec.service
        if service is None or service.host is None:
            _log.warning(
                "conversion from v1alpha1 to v1beta1 wasn't possible as service or "
                "service.host was nil for %s",
                self.metadata.name,
            )
            return
        dst.spec.host = service.host

    def convert_from(self, src: v1beta1.APIRule) -> None:
        """Fill this APIRule from a v1beta1 one, moving the host into the service."""
        self.spec = APIRuleSpec.from_dict(src.spec.to_dict())
        self.status = APIRuleStatus.from_dict(src.status.to_dict())
        self.metadata = copy.deepcopy(src.metadata)

        if src.spec.service is None:
            _log.warning(
                "conversion from v1beta1 to v1alpha1 wasn't possible as service isn't set "
                "on spec level"
            )
            return
        if any(rule.service is not None for rule in src.spec.rules):
            _log.warning(
                "conversion from v1beta1 to v1alpha1 isn't possible with rule level "
                "service definition"
            )
            return
        if src.spec.host is None:
            _log.warning(
                "conversion from v1beta1 to v1alpha1 wasn't possible as host was nil for %s",
                src.metadata.name,
            )
            return
        self.spec.service.host = src.spec.host


@dataclass
class APIRuleList:
    """A list of v1alpha1 APIRules."""

    items: list[APIRule] = field(default_factory=list)
    api_version: str = str(GROUP_VERSION)
    kind: str = LIST_KIND

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.api_version:
            out["apiVersion"] = self.api_version
        if self.kind:
            out["kind"] = self.kind
        out["metadata"] = {}
        out["items"] = [item.to_dict() for item in self.items]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIRuleList:
        return cls(
            items=[APIRule.from_dict(item) for item in data.get("items") or []],
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
        )