"""Annotation record types."""

from .models import AnnotationKind, AnnotationRecord

__all__ = ["AnnotationKind", "AnnotationRecord"]
