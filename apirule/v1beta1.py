"""The v1beta1 APIRule resource: the storage and conversion hub version."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .meta import V1BETA1, ObjectMeta, _format_time, _parse_time

GROUP_VERSION = V1BETA1
KIND = "APIRule"
LIST_KIND = "APIRuleList"


class StatusCode(str, enum.Enum):
    """Outcome of processing one resource."""

    OK = "OK"
    SKIPPED = "SKIPPED"
    ERROR = "ERROR"


@dataclass
class Handler:
    """A named handler with an optional free-form configuration."""

    name: str = ""
    config: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"handler": self.name}
        if self.config is not None:
            out["config"] = copy.deepcopy(self.config)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Handler:
        return cls(name=data.get("handler", ""), config=copy.deepcopy(data.get("config")))


class Authenticator(Handler):
    """A handler that authenticates provided credentials."""


class Mutator(Handler):
    """A handler that transforms a request before it is forwarded."""


@dataclass
class Service:
    """The service to expose."""

    name: str | None = None
    namespace: str | None = None
    port: int | None = None
    is_external: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.namespace is not None:
            out["namespace"] = self.namespace
        out["port"] = self.port
        if self.is_external is not None:
            out["external"] = self.is_external
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Service:
        return cls(
            name=data.get("name"),
            namespace=data.get("namespace"),
            port=data.get("port"),
            is_external=data.get("external"),
        )


@dataclass
class JwtAuthentication:
    """Issuer and key set used to authenticate a JWT."""

    issuer: str = ""
    jwks_uri: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"issuer": self.issuer, "jwksUri": self.jwks_uri}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JwtAuthentication:
        return cls(issuer=data.get("issuer", ""), jwks_uri=data.get("jwksUri", ""))


@dataclass
class JwtAuthorization:
    """Scopes and audiences a JWT must carry."""

    required_scopes: list[str] | None = None
    audiences: list[str] | None = None

    def has_required_scopes(self) -> bool:
        return bool(self.required_scopes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "requiredScopes": None if self.required_scopes is None else list(self.required_scopes),
            "audiences": None if self.audiences is None else list(self.audiences),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JwtAuthorization:
        scopes = data.get("requiredScopes")
        audiences = data.get("audiences")
        return cls(
            required_scopes=None if scopes is None else list(scopes),
            audiences=None if audiences is None else list(audiences),
        )


@dataclass
class JwtConfig:
    """Configuration of the JWT handler when requests are checked by the mesh."""

    authentications: list[JwtAuthentication] = field(default_factory=list)
    authorizations: list[JwtAuthorization] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.authentications:
            out["authentications"] = [a.to_dict() for a in self.authentications]
        if self.authorizations:
            out["authorizations"] = [a.to_dict() for a in self.authorizations]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JwtConfig:
        return cls(
            authentications=[
                JwtAuthentication.from_dict(a) for a in data.get("authentications") or []
            ],
            authorizations=[JwtAuthorization.from_dict(a) for a in data.get("authorizations") or []],
        )


@dataclass
class Rule:
    """Access rules for one path."""

    path: str = ""
    methods: list[str] = field(default_factory=list)
    access_strategies: list[Authenticator] = field(default_factory=list)
    mutators: list[Mutator] = field(default_factory=list)
    service: Service | None = None

    def get_jwt_istio_authorizations(self) -> list[JwtAuthorization]:
        """Authorizations from the first access strategy's JWT configuration.

        A configuration that cannot be read yields no authorizations.
        """
        strategy = self.access_strategies[0]
        if strategy.config is None:
            return []
        try:
            return JwtConfig.from_dict(strategy.config).authorizations
        except (AttributeError, TypeError, ValueError):
            return []

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"path": self.path}
        if self.service is not None:
            out["service"] = self.service.to_dict()
        out["methods"] = list(self.methods)
        out["accessStrategies"] = [a.to_dict() for a in self.access_strategies]
        if self.mutators:
            out["mutators"] = [m.to_dict() for m in self.mutators]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rule:
        service = data.get("service")
        return cls(
            path=data.get("path", ""),
            methods=list(data.get("methods") or []),
            access_strategies=[
                Authenticator.from_dict(a) for a in data.get("accessStrategies") or []
            ],
            mutators=[Mutator.from_dict(m) for m in data.get("mutators") or []],
            service=None if service is None else Service.from_dict(service),
        )


@dataclass
class APIRuleSpec:
    """Desired state of an APIRule."""

    host: str | None = None
    service: Service | None = None
    gateway: str | None = None
    rules: list[Rule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"host": self.host}
        if self.service is not None:
            out["service"] = self.service.to_dict()
        out["gateway"] = self.gateway
        out["rules"] = [r.to_dict() for r in self.rules]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIRuleSpec:
        service = data.get("service")
        return cls(
            host=data.get("host"),
            service=None if service is None else Service.from_dict(service),
            gateway=data.get("gateway"),
            rules=[Rule.from_dict(r) for r in data.get("rules") or []],
        )


@dataclass
class APIRuleResourceStatus:
    """Status of one generated resource."""

    code: StatusCode | None = None
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.code is not None:
            out["code"] = self.code.value
        if self.description:
            out["desc"] = self.description
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIRuleResourceStatus:
        code = data.get("code")
        return cls(code=StatusCode(code) if code else None, description=data.get("desc", ""))


_RESOURCE_STATUS_KEYS = (
    ("api_rule_status", "APIRuleStatus"),
    ("virtual_service_status", "virtualServiceStatus"),
    ("access_rule_status", "accessRuleStatus"),
    ("request_authentication_status", "requestAuthenticationStatus"),
    ("authorization_policy_status", "authorizationPolicyStatus"),
)


@dataclass
class APIRuleStatus:
    """Observed state of an APIRule."""

    last_processed_time: datetime | None = None
    observed_generation: int = 0
    api_rule_status: APIRuleResourceStatus | None = None
    virtual_service_status: APIRuleResourceStatus | None = None
    access_rule_status: APIRuleResourceStatus | None = None
    request_authentication_status: APIRuleResourceStatus | None = None
    authorization_policy_status: APIRuleResourceStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.last_processed_time is not None:
            out["lastProcessedTime"] = _format_time(self.last_processed_time)
        if self.observed_generation:
            out["observedGeneration"] = self.observed_generation
        for attribute, key in _RESOURCE_STATUS_KEYS:
            value = getattr(self, attribute)
            if value is not None:
                out[key] = value.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        processed = data.get("lastProcessedTime")
        resources = {
            attribute: APIRuleResourceStatus.from_dict(data[key])
            for attribute, key in _RESOURCE_STATUS_KEYS
            if data.get(key) is not None
        }
        return cls(
            last_processed_time=None if processed is None else _parse_time(processed),
            observed_generation=data.get("observedGeneration", 0),
            **resources,
        )


@dataclass
class APIRule:
    """An APIRule: exposes a service under a host with per-path access rules."""

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


@dataclass
class APIRuleList:
    """A list of APIRules."""

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