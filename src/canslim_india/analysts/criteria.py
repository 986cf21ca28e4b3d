from typing import Dict

from canslim_india.analysts.models import CRITERIA_LETTERS, AnalysisStatus, CanslimCriterion

PENDING_FINDING = "Pending analysis..."

# Static display metadata for each letter. Status and finding come from the model.
CANSLIM_DEFINITIONS: Dict[str, Dict[str, str]] = {
    "C": {
        "name": "Current Earnings",
        "description": "Current quarterly earnings per share (EPS) should be up significantly (ideally 25%+) and accelerating compared to the same quarter prior year.",
    },
    "A": {
        "name": "Annual Earnings",
        "description": "Annual earnings should show meaningful growth in *each* of the last 3 years. Look for Return on Equity (ROE) of 17% or higher.",
    },
    "N": {
        "name": "New Product/Service/Highs",
        "description": "New products, management, or new highs. Stock must emerge from a proper base (Cup with Handle, Double Bottom, Flat Base) at the correct pivot point.",
    },
    "S": {
        "name": "Supply and Demand",
        "description": "Volume should dry up during base consolidation and spike (40%+) above average on breakout. Demand must overwhelm supply.",
    },
    "L": {
        "name": "Leader or Laggard",
        "description": "Buy the leading stock in a leading industry group. Relative Strength (RS) Rating should be 80+ (preferably 90+).",
    },
    "I": {
        "name": "Institutional Sponsorship",
        "description": 'Rising institutional ownership in recent quarters. Look for "A+" quality funds taking positions.',
    },
    "M": {
        "name": "Market Direction",
        "description": "3 out of 4 stocks follow the market trend. Only buy in a confirmed market uptrend (look for follow-through days on indices).",
    },
}


def default_criterion(letter: str) -> CanslimCriterion:
    """A criterion card before (or without) any model input."""
    definition = CANSLIM_DEFINITIONS[letter]
    return CanslimCriterion(
        letter=letter,
        name=definition["name"],
        description=definition["description"],
        status=AnalysisStatus.UNKNOWN,
        finding=PENDING_FINDING,
    )


def default_criteria() -> Dict[str, CanslimCriterion]:
    return {letter: default_criterion(letter) for letter in CRITERIA_LETTERS}
