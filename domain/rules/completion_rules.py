from typing import Optional, Union

from domain.models.enums import TrackingMode

Number = Union[int, float]


class CompletionRules:
    @staticmethod
    def threshold(mode: TrackingMode, target_value: Optional[Number]) -> Number:
        """Raw value needed to count as completed. Missing targets mean 0."""
        target = target_value or 0
        if mode == TrackingMode.DURATION:
            # Target is minutes, logged value is seconds
            return target * 60
        if mode == TrackingMode.COUNT:
            return target
        return 0

    @staticmethod
    def is_completed(mode: TrackingMode, target_value: Optional[Number], raw_value: Number) -> bool:
        mode = TrackingMode(mode)
        if mode == TrackingMode.BINARY:
            return raw_value > 0
        return raw_value >= CompletionRules.threshold(mode, target_value)

    @staticmethod
    def progress_percent(mode: TrackingMode, target_value: Optional[Number], raw_value: Number, is_completed: bool) -> float:
        """Share of the target reached, clamped to [0, 100]. Used by history charts."""
        mode = TrackingMode(mode)
        if mode == TrackingMode.BINARY:
            value = 100.0 if is_completed else 0.0
        else:
            # Unset targets chart against 1 unit (1 minute for durations)
            target = CompletionRules.threshold(mode, target_value or 1)
            value = (raw_value / target) * 100
        return max(0.0, min(float(value), 100.0))
