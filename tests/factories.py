import json


class FakeDraftModel:
    """Stands in for the Gemini wrapper; records every prompt it is given."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else json.dumps({
            'insight': 'Institutional flows are rotating into regulated yield.',
            'draft_tweet': 'ETF inflows hit a monthly record while spot volumes fell. '
                           'Allocators are choosing wrappers over exchanges, which matters '
                           'more for liquidity than the headline number suggests.',
        })
        self.error = error
        self.prompts = []

    def generate(self, prompt, schema):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


def candidate(id, votes=None, **extra):
    record = {
        'id': id,
        'title': f"Story {id}",
        'url': f"https://cryptopanic.com/news/{id}",
        'source': {'title': 'CoinTelegraph'},
        'votes': votes,
    }
    record.update(extra)
    return record


def votes(total):
    """A vote object whose categories sum to ``total``."""
    return {'positive': total, 'negative': 0, 'important': 0, 'saved': 0, 'lol': 0}
