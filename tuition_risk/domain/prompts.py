"""Prompt construction for the risk prediction model"""

from tuition_risk.domain.models import FinancialProfile

SYSTEM_PROMPT = (
    "You are an expert assistant in school financial analysis. Your answers are concise, "
    "data driven and ALWAYS a single JSON object without any markdown formatting or code "
    "blocks. Reply directly with the JSON object and no additional text before or after it."
)

ANALYST_PREAMBLE = "You are an intelligent analyst of financial behaviour in a school system."

# Both prompt modes end with this block; the response parser depends on it.
RESPONSE_INSTRUCTIONS = """IMPORTANT INSTRUCTIONS:
1. Reply ONLY with the JSON object. Do not add any text before or after it.
2. Do not use markdown formatting (such as backticks or code blocks).
3. The JSON must have exactly this structure:
{"risk_level": "low|medium|high", "justification": "Your justification here"}
4. The justification must be brief (2 lines maximum).
5. The value of risk_level must be exactly: "low", "medium" or "high".
"""


def _structured_prompt(profile: FinancialProfile) -> str:
    return f"""{ANALYST_PREAMBLE}
You will be given a structured prompt in JSON format with all the information needed to analyze a student's risk of future non-payment.

The JSON prompt follows:
{profile.structured_prompt}

Based on this data, analyze the case and decide whether the student represents a LOW, MEDIUM or HIGH risk for future payments.

{RESPONSE_INSTRUCTIONS}"""


def _plain_prompt(profile: FinancialProfile) -> str:
    return f"""{ANALYST_PREAMBLE} You will be given the following data about a student and must predict their risk level for future payments:

- Name: {profile.student_name}
- Total overdue amount: {profile.total_debt}
- % of payments made on time: {profile.percentage_on_time:g}%
- Average delay days on previous payments: {profile.average_delay_days:g}
- Number of active debts: {profile.active_debts}
- Payment history: {profile.payment_history}
- Average risk of the academic group: {profile.group_risk_level}
- Group name: {profile.group_name}
- School level: {profile.school_level}

Based on this data, answer with one of the following levels: high, medium or low.

{RESPONSE_INSTRUCTIONS}"""


def prompt_mode(profile: FinancialProfile) -> str:
    return "structured" if profile.structured_prompt else "plain"


def build_prompt(profile: FinancialProfile) -> str:
    """
    Render a financial profile into the model instruction.

    A pre-built structured payload, when present, is embedded verbatim;
    otherwise the profile fields fill a natural-language template.
    """
    if profile.structured_prompt:
        return _structured_prompt(profile)
    return _plain_prompt(profile)
