from .schema import as_records, validate_sample, samples_to_matrix, extract_targets
from .synthetic import (
    BASELINE_SAMPLE,
    make_sample,
    generate_synthetic_heart_data,
    generate_age_threshold_data
)
from .real_data import load_heart_csv
