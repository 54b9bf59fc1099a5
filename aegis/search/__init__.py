"""
Search Module

Fixed-depth negamax over every legal move, used when no external engine
can answer. No pruning, no move ordering, no caching: the result depends
only on the position, the depth and python-chess's move enumeration order.

Key Components:
    - search: Root-level search returning the best ScoredMove
    - negamax: Recursive scoring of a position
"""

from aegis.search.negamax import search, negamax, ScoredMove, MAX_SEARCH_DEPTH

__all__ = ['search', 'negamax', 'ScoredMove', 'MAX_SEARCH_DEPTH']
