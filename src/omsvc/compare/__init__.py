"""
Sub-package Documentation
============================

This is the package responsible for matching the structural variants called by optical mapping (the base
source) with the variants called by one or more sequencing based callers (the other sources).

Output Files
--------------

+----------------------------+------------------+------------------------------------------------------------+
| expected name/suffix       | file type/format | content                                                    |
+============================+==================+============================================================+
| user defined               | text/tabbed      |  one row per base variant with the match from each source  |
+----------------------------+------------------+------------------------------------------------------------+


Algorithm Overview
---------------------

- resolve the type of each variant (breakends may be compared by their alternate type)
- index each other source by type and chromosomes
- for each base variant and each other source

    - skip the source if the base variant type is filtered out
    - fail if the chromosomes do not match
    - fail if either breakpoint is further than the distance variance (identical breakpoints when not given)
    - fail if the overlap proportion of interval variants is below the minimal proportion
    - fail if the variants do not share a gene (when required)
    - keep the closest passing variant, ties go to the first variant in the source

- report the genes of the base variant found in any of the matched variants

"""
from .compare import ComparisonFilter, MatchSet, compare_variants, report_header
