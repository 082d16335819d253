import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from chrsurvey.recode import recode_frame
from chrsurvey.synthetic import make_synthetic


def raw_record(**overrides):
    """A raw survey record with every field present and nothing selected."""
    record = {
        "age": None, "gender": None, "ethn_hisp": None, "race_white": None,
        "race_black": None, "race_bi_multi": None, "site_location": None,
    }
    record.update({f"Q{i}": None for i in range(1, 21)})
    record.update(overrides)
    return record


@pytest.fixture
def four_ages_df():
    records = [
        raw_record(age="20", Q1="3", Q6="0", site_location="Health Brigade - Richmond"),
        raw_record(age="40", Q1="1", Q6="5+", site_location="Mount Rogers Health District"),
        raw_record(age="50", Q1="5", Q6="2", site_location="Somewhere else"),
        raw_record(age=None, Q1=None, Q6=None),
    ]
    return recode_frame(pd.DataFrame(records))


@pytest.fixture
def synthetic_df():
    return recode_frame(make_synthetic(300, seed=11))
