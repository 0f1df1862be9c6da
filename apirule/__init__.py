"""APIRule resource models, version conversion and reconciliation helpers."""

__version__ = "0.1.0"
__all__ = ["meta", "v1beta1", "v1alpha1", "controller"]