from .gap import GapSegmenter, sort_points

__all__ = ["GapSegmenter", "sort_points"]
