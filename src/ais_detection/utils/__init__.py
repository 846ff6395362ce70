from ais_detection.utils.validation import InvalidInputError, as_1d_array, as_matrix

__all__ = ["InvalidInputError", "as_1d_array", "as_matrix"]
