"""Group/version identifiers and object metadata shared by all API versions."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

GROUP = "gateway.kyma-project.io"


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


V1BETA1 = GroupVersion(GROUP, "v1beta1")
V1ALPHA1 = GroupVersion(GROUP, "v1alpha1")


def _format_time(moment: datetime) -> str:
    """Render a timestamp as RFC 3339 in UTC with second precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp."""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class ObjectMeta:
    """Metadata every stored object carries."""

    name: str = ""
    namespace: str = ""
    generation: int = 0
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    deletion_timestamp: datetime | None = None

    @property
    def namespaced_name(self) -> str:
        """The object's key in the form namespace/name."""
        return f"{self.namespace}/{self.name}"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.namespace:
            out["namespace"] = self.namespace
        if self.generation:
            out["generation"] = self.generation
        if self.resource_version:
            out["resourceVersion"] = self.resource_version
        if self.labels:
            out["labels"] = dict(self.labels)
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.finalizers:
            out["finalizers"] = list(self.finalizers)
        if self.deletion_timestamp is not None:
            out["deletionTimestamp"] = _format_time(self.deletion_timestamp)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ObjectMeta:
        deletion = data.get("deletionTimestamp")
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            generation=data.get("generation", 0),
            resource_version=data.get("resourceVersion", ""),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
            finalizers=list(data.get("finalizers") or []),
            deletion_timestamp=None if deletion is None else _parse_time(deletion),
        )

    def __deepcopy__(self, memo: dict[int, Any]) -> ObjectMeta:
        return ObjectMeta(
            name=self.name,
            namespace=self.namespace,
            generation=self.generation,
            resource_version=self.resource_version,
            labels=copy.deepcopy(self.labels, memo),
            annotations=copy.deepcopy(self.annotations, memo),
            finalizers=list(self.finalizers),
            deletion_timestamp=self.deletion_timestamp,
        )


@dataclass
class ConfigMap:
    """A named set of string entries."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    data: dict[str, str] = field(default_factory=dict)