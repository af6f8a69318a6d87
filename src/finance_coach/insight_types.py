"""
Insight record construction.
"""
INSIGHT_TYPES = ('alert', 'suggestion', 'achievement', 'opportunity')


def make_insight(insight_id, insight_type, title, message, impact_amount=0.0):
    if insight_type not in INSIGHT_TYPES:
        raise ValueError(f"Unknown insight type: {insight_type}")
    return {
        'id': insight_id,
        'type': insight_type,
        'title': title,
        'message': message,
        'impact_amount': abs(impact_amount),
    }
