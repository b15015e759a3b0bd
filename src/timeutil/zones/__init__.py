"""
Timezone lookups: the precomputed registry and ISO chronologies.
"""
