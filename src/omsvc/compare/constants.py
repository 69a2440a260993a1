from ..constants import OmsvcNamespace


DEFAULTS = OmsvcNamespace()
"""
- :term:`distance_variance`
- :term:`minimal_proportion`
- :term:`variant_type`
- :term:`gene_intersection`
- :term:`prefer_base_svtype`
- :term:`processes`
"""
DEFAULTS.add(
    'distance_variance',
    None,
    cast_type=int,
    nullable=True,
    env_overwritable=True,
    defn='the maximum number of bases each breakpoint of a matched variant may differ from the base variant. '
    'When not given the breakpoints must be identical',
)
DEFAULTS.add(
    'minimal_proportion',
    None,
    cast_type=float,
    nullable=True,
    env_overwritable=True,
    defn='minimal proportion (0.0 - 1.0) of the overlap of two interval variants relative to the larger of the two',
)
DEFAULTS.add(
    'variant_type',
    None,
    cast_type=str,
    nullable=True,
    listable=True,
    env_overwritable=True,
    defn='variant type filter, any combination of the structural variant types. When not given all types are compared',
)
DEFAULTS.add(
    'gene_intersection',
    False,
    env_overwritable=True,
    defn='only match variants which overlap at least one common gene',
)
DEFAULTS.add(
    'prefer_base_svtype',
    False,
    env_overwritable=True,
    defn='compare breakends by their base type (SVTYPE) rather than the alternate type (SVTYPE2) reported by '
    'linked-read callers',
)
DEFAULTS.add(
    'keep_duplicates',
    False,
    env_overwritable=True,
    defn='do not remove duplicate variants from each input source',
)
DEFAULTS.add(
    'processes',
    1,
    env_overwritable=True,
    defn='number of processes used to match the variants. Work is split by chromosome',
)
