# congruent/config.py
# Defaults shared by the sample tables and the Streamlit explorer.

# Generator variant: 'lcg' | 'park_miller' | 'park_miller_64' | 'schrage'
DEFAULT_VARIANT = 'lcg'

# 0 selects each variant's own default seed
DEFAULT_SEED = 1

# Sample table defaults
DEFAULT_SAMPLE_COUNT = 10_000
DEFAULT_LOWER = 0
DEFAULT_UPPER = 9
DEFAULT_STREAMS = 1

# Significance level for the chi-square uniformity check
UNIFORMITY_ALPHA = 0.01

# Widest range tested value by value; wider ranges are binned first
MAX_CATEGORIES = 100_000
HISTOGRAM_BINS = 100

# Logging level
LOG_LEVEL = 'INFO'
