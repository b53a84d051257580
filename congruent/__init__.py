"""Congruential pseudorandom generators with unbiased bounded draws and skip-ahead."""

from .generators import (
    GENERATORS,
    LCG,
    CongruentialGenerator,
    ParkMiller,
    ParkMiller64,
    Schrage,
    make_generator,
)
from .recurrence import Recurrence, jump, jump_coefficients
from .statistics import (
    SerialCorrelationResult,
    UniformityResult,
    bin_values,
    chi_square_uniformity,
    describe_uniformity,
    serial_correlation,
)
from .data_generator import counts_frame, generate_samples, export_to_csv
