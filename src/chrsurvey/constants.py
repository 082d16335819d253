# src/chrsurvey/constants.py
from __future__ import annotations

from .types import Question

UNKNOWN = "Unknown"; OTHER_UNKNOWN = "Other/Unknown"; NA_SKIP = "NA/Skip"
OVERALL_DIMENSION = "Overall"; OVERALL_LEVEL = "All respondents"

DEFAULT = "DEFAULT"; ANYPOS = "ANYPOS"
RULES = (DEFAULT, ANYPOS)

SUBGROUP_DIMENSIONS = ("gender", "age_group", "race_ethnicity", "region", "site_code")

RAW_FIELDS = ("age", "gender", "ethn_hisp", "race_white", "race_black", "race_bi_multi", "site_location")

# Report legends depend on these exact codes.
SITE_CODES = {
    "Health Brigade - Richmond": "HB",
    "Strength in Peers - Harrisonburg": "SIP",
    "Chris Atwood Foundation - Reston": "CAF",
    "Virginia Harm Reduction Coalition - Norfolk": "VHRC",
    "Council of Community Services - Roanoke": "CCS",
    "Mount Rogers Health District": "MtRogers",
    "LENOWISCO Health District": "LENOWISCO",
    "Cumberland Plateau Health District": "CPHD",
}
SITE_REGIONS = {
    "HB": "Central",
    "SIP": "Northern", "CAF": "Northern",
    "VHRC": "Eastern",
    "CCS": "Southwest", "MtRogers": "Southwest", "LENOWISCO": "Southwest", "CPHD": "Southwest",
}

AGE_GROUPS = ("18-34", "35-44", "45+", UNKNOWN)
RACE_ETHNICITIES = ("Hispanic", "NH-White", "NH-Black", "NH-Bi/Multi", OTHER_UNKNOWN)

COUNT_FAMILY = "count"
LABEL_FAMILIES = {
    "helpfulness": ("Not at all helpful", "Slightly helpful", "Moderately helpful",
                    "Very helpful", "Extremely helpful"),
    "satisfaction": ("Very dissatisfied", "Dissatisfied", "Neither satisfied nor dissatisfied",
                     "Satisfied", "Very satisfied"),
    "concern": ("Not at all concerned", "Slightly concerned", "Moderately concerned",
                "Very concerned", "Extremely concerned"),
    "treatment": ("Not at all", "A little", "Somewhat", "Quite a bit", "Very much"),
}

QUESTIONS = (
    Question("Q1", "Helpfulness of syringe services", DEFAULT, "helpfulness"),
    Question("Q2", "Helpfulness of NARCAN training", DEFAULT, "helpfulness"),
    Question("Q3", "Helpfulness of HIV/HCV testing", DEFAULT, "helpfulness"),
    Question("Q4", "Helpfulness of referrals to care", DEFAULT, "helpfulness"),
    Question("Q5", "Helpfulness of wound care supplies", DEFAULT, "helpfulness"),
    Question("Q6", "Offered PrEP/PEP", ANYPOS, COUNT_FAMILY),
    Question("Q7", "Satisfaction with staff respect", DEFAULT, "satisfaction"),
    Question("Q8", "Satisfaction with hours of operation", DEFAULT, "satisfaction"),
    Question("Q9", "Satisfaction with site location", DEFAULT, "satisfaction"),
    Question("Q10", "Overall satisfaction with program", DEFAULT, "satisfaction"),
    Question("Q11", "HIV tests taken", ANYPOS, COUNT_FAMILY),
    Question("Q12", "NARCAN used on someone", ANYPOS, COUNT_FAMILY),
    Question("Q13", "Concern about overdose", DEFAULT, "concern"),
    Question("Q14", "Concern about HIV or hepatitis C", DEFAULT, "concern"),
    Question("Q15", "Concern about police contact", DEFAULT, "concern"),
    Question("Q16", "Concern about stable housing", DEFAULT, "concern"),
    Question("Q17", "Considered substance use treatment", DEFAULT, "treatment"),
    Question("Q18", "Considered medication for opioid use disorder", DEFAULT, "treatment"),
    Question("Q19", "Considered mental health services", DEFAULT, "treatment"),
    Question("Q20", "Considered reducing use", DEFAULT, "treatment"),
)

LEGACY_CSV_HEADERS = {
    "question_label": "question", "subgroup_dimension": "subgroup", "subgroup_level": "level",
    "positive_n": "high_n",
}
