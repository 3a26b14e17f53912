from .replay import replay, summarize
