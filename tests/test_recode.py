"""Tests for record-level harmonization of raw survey fields."""

import logging
import math

import pandas as pd
import pytest

from chrsurvey.constants import (
    AGE_GROUPS, NA_SKIP, OTHER_UNKNOWN, QUESTIONS, RACE_ETHNICITIES, SITE_CODES, SITE_REGIONS, UNKNOWN,
)
from chrsurvey.recode import (
    age_group, gender_level, question_label, race_ethnicity, recode_frame, recode_record, region, site_code,
)
from conftest import raw_record

Q = {q.qid: q for q in QUESTIONS}


class TestAgeGroup:
    @pytest.mark.parametrize("age, expected", [
        (17, UNKNOWN), (0, UNKNOWN), (18, "18-34"), (34, "18-34"), (35, "35-44"),
        (44, "35-44"), (45, "45+"), (97, "45+"), ("20", "18-34"), (" 44 ", "35-44"), (34.5, "18-34"),
        (34.99, "18-34"), (44.5, "35-44"),
    ])
    def test_boundaries(self, age, expected):
        assert age_group(age) == expected

    @pytest.mark.parametrize("age", [None, "", "   ", "unknown", math.nan, float("inf"), [20]])
    def test_missing_or_malformed_is_unknown(self, age):
        assert age_group(age) == UNKNOWN

    def test_always_one_of_the_defined_buckets(self):
        for age in [None, -3, 12, 18, 30, 40, 60, "x", 200]:
            assert age_group(age) in AGE_GROUPS


class TestRaceEthnicity:
    def test_hispanic_wins_over_race_flags(self):
        assert race_ethnicity("Yes", "Yes", None, None) == "Hispanic"

    def test_priority_order_for_conflicting_race_flags(self):
        assert race_ethnicity("No", "Yes", "Yes", "Yes") == "NH-White"
        assert race_ethnicity("No", "No", "Yes", "Yes") == "NH-Black"
        assert race_ethnicity(None, None, None, "Yes") == "NH-Bi/Multi"

    def test_flags_are_case_insensitive(self):
        assert race_ethnicity(" YES ", None, None, None) == "Hispanic"
        assert race_ethnicity("no", "yes", None, None) == "NH-White"

    def test_nothing_set_is_other_unknown(self):
        assert race_ethnicity(None, "", math.nan, "No") == OTHER_UNKNOWN

    def test_result_is_a_known_category(self):
        assert race_ethnicity("1", "true", "Y", None) in RACE_ETHNICITIES


class TestSiteAndRegion:
    def test_health_brigade(self):
        code = site_code("Health Brigade - Richmond")
        assert code == "HB"
        assert region(code) == "Central"

    def test_unrecognized_site(self):
        code = site_code("Pop-up van, parking lot")
        assert code == UNKNOWN
        assert region(code) == UNKNOWN

    def test_match_is_case_sensitive_but_ignores_surrounding_space(self):
        assert site_code("health brigade - richmond") == UNKNOWN
        assert site_code("  Health Brigade - Richmond ") == "HB"

    def test_missing_site(self):
        assert site_code(None) == UNKNOWN
        assert site_code(math.nan) == UNKNOWN

    def test_lookup_tables(self):
        assert len(SITE_CODES) == 8
        assert set(SITE_CODES.values()) == set(SITE_REGIONS)
        assert len(set(SITE_REGIONS.values())) == 4
        assert site_code("Mount Rogers Health District") == "MtRogers"


class TestQuestionLabel:
    def test_ordinal_families(self):
        assert question_label(Q["Q1"], "4") == "Very helpful"
        assert question_label(Q["Q7"], "1") == "Very dissatisfied"
        assert question_label(Q["Q13"], "5") == "Extremely concerned"
        assert question_label(Q["Q17"], 3.0) == "Somewhat"

    @pytest.mark.parametrize("code", ["", None, "0", "6", "NA/Skip", "three", math.nan])
    def test_invalid_ordinal_is_na_skip(self, code):
        assert question_label(Q["Q1"], code) == NA_SKIP

    def test_count_questions_keep_raw_value(self):
        assert question_label(Q["Q6"], " 5+ ") == "5+"
        assert question_label(Q["Q11"], "0") == "0"
        assert question_label(Q["Q12"], "") == NA_SKIP
        assert question_label(Q["Q12"], None) == NA_SKIP


class TestRecodeRecord:
    def test_adds_every_derived_field(self):
        out = recode_record(raw_record(age=25, gender=" Female ", ethn_hisp="No", race_black="Yes",
                                       site_location="Health Brigade - Richmond", Q1="3", Q6="2"))
        assert out["age_group"] == "18-34"
        assert out["race_ethnicity"] == "NH-Black"
        assert out["site_code"] == "HB"
        assert out["region"] == "Central"
        assert out["gender"] == "Female"
        assert out["Q1_label"] == "Moderately helpful"
        assert out["Q6_label"] == "2"
        assert out["Q2_label"] == NA_SKIP

    def test_does_not_mutate_input(self):
        raw = raw_record(age=30, Q1="4")
        before = dict(raw)
        recode_record(raw)
        assert raw == before

    def test_idempotent(self):
        raw = raw_record(age=44, ethn_hisp="Yes", site_location="Nowhere", Q1="2", Q12="1")
        once = recode_record(raw)
        twice = recode_record(once)
        assert once == twice

    def test_blank_gender_is_unknown(self):
        assert gender_level("") == UNKNOWN
        assert recode_record(raw_record())["gender"] == UNKNOWN

    def test_record_missing_fields_still_recodes(self):
        out = recode_record({"age": "19"})
        assert out["age_group"] == "18-34"
        assert out["site_code"] == UNKNOWN
        assert out["race_ethnicity"] == OTHER_UNKNOWN


class TestRecodeFrame:
    def test_matches_record_level_rules(self, four_ages_df):
        assert list(four_ages_df["age_group"]) == ["18-34", "35-44", "45+", UNKNOWN]
        assert list(four_ages_df["site_code"]) == ["HB", "MtRogers", UNKNOWN, UNKNOWN]
        assert list(four_ages_df["region"]) == ["Central", "Southwest", UNKNOWN, UNKNOWN]
        assert list(four_ages_df["Q1_label"]) == ["Moderately helpful", "Not at all helpful",
                                                  "Extremely helpful", NA_SKIP]

    def test_returns_copy(self):
        raw = pd.DataFrame([raw_record(age="20")])
        cols = list(raw.columns)
        recode_frame(raw)
        assert list(raw.columns) == cols

    def test_missing_columns_are_added_as_blank(self, caplog):
        raw = pd.DataFrame({"age": ["22", "60"], "Q1": ["4", "1"]})
        with caplog.at_level(logging.WARNING, logger="chrsurvey"):
            out = recode_frame(raw)
        assert "site_location" in caplog.text
        assert list(out["site_code"]) == [UNKNOWN, UNKNOWN]
        assert list(out["gender"]) == [UNKNOWN, UNKNOWN]
        assert list(out["Q20_label"]) == [NA_SKIP, NA_SKIP]

    def test_idempotent(self, synthetic_df):
        again = recode_frame(synthetic_df)
        pd.testing.assert_frame_equal(again, synthetic_df)
