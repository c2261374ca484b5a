from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..core.enums import TimeCase
from ..policy.model import PolicyConfig
from .model import ClassifiedSegment


class PolicyMerger:
    """Re-attributes early-start and overtime spans to shift buckets.

    The case id is kept for display; only ``shift_definition_id`` changes, so
    aggregation counts the span under the shift it was merged into.
    """

    def merge(self, segments: Sequence[ClassifiedSegment], policy: PolicyConfig) -> list[ClassifiedSegment]:
        out: list[ClassifiedSegment] = []
        for seg in segments:
            if seg.anchor_definition_id is not None and self._should_merge(seg.case_id, policy):
                seg = replace(seg, shift_definition_id=seg.anchor_definition_id)
            out.append(seg)
        return out

    @staticmethod
    def _should_merge(case_id, policy: PolicyConfig) -> bool:
        if case_id == TimeCase.EARLY_START:
            return policy.merge_case4_to_shift1
        if case_id == TimeCase.OVERTIME:
            return policy.merge_case5_to_latest
        return False
