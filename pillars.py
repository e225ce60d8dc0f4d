from enum import Enum


class Pillar(str, Enum):
    BASIC_HUMAN_NEEDS = "basic_human_needs"
    WELLBEING = "wellbeing"
    OPPORTUNITY = "opportunity"


#pretty names
PILLAR_LABELS = {
    Pillar.BASIC_HUMAN_NEEDS: "Basic Human Needs",
    Pillar.WELLBEING:         "Foundations of Wellbeing",
    Pillar.OPPORTUNITY:       "Opportunity",
}

SUB_COMPONENTS = {
    Pillar.BASIC_HUMAN_NEEDS: ("basic_nutri_med_care", "water_sanitation", "shelter", "personal_safety"),
    Pillar.WELLBEING:         ("access_basic_knowledge", "access_info_comm", "health_wellness", "env_quality"),
    Pillar.OPPORTUNITY:       ("personal_rights", "personal_freedom_choice", "inclusiveness", "access_adv_edu"),
}

SUB_COMPONENT_LABELS = {
    "basic_nutri_med_care":    "Nutrition & Basic Medical Care",
    "water_sanitation":        "Water & Sanitation",
    "shelter":                 "Shelter",
    "personal_safety":         "Personal Safety",
    "access_basic_knowledge":  "Access to Basic Knowledge",
    "access_info_comm":        "Access to Info & Communications",
    "health_wellness":         "Health & Wellness",
    "env_quality":             "Environmental Quality",
    "personal_rights":         "Personal Rights",
    "personal_freedom_choice": "Personal Freedom & Choice",
    "inclusiveness":           "Inclusiveness",
    "access_adv_edu":          "Access to Advanced Education",
}


def parse_pillar(value) -> Pillar | None:
    """Return the Pillar for a key like "opportunity", or None."""
    if isinstance(value, Pillar):
        return value
    try:
        return Pillar(value)
    except ValueError:
        return None


def score_columns() -> list[str]:
    cols = [p.value for p in Pillar]
    for p in Pillar:
        cols.extend(SUB_COMPONENTS[p])
    return cols
