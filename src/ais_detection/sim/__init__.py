from ais_detection.sim.ionograms import simulate_repeating_matrix

__all__ = ["simulate_repeating_matrix"]
