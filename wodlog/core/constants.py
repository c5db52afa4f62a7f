"""Application constants."""

# Hybrid 1RM policy: Epley up to this many reps, Wathan above
EPLEY_MAX_REPS = 10

# Brzycki denominator (37 - reps) must stay positive
BRZYCKI_REP_LIMIT = 37

# PR listing limits
PR_LIST_DEFAULT_LIMIT = 50
PR_LIST_MAX_LIMIT = 200
PR_SUMMARY_DEFAULT_LIMIT = 20
PR_SUMMARY_MAX_LIMIT = 100

# Performance history per movement / WOD
PERFORMANCE_HISTORY_LIMIT = 1000

# Catalog search
SEARCH_DEFAULT_LIMIT = 10
