"""Domain-specific scoring and policy modules.

Modules here import vinylmatch domain enums and implement the matching
rules (mix taxonomy, similarity, confidence, review buckets). Pure
utilities that don't depend on domain models live in ``vinylmatch.utils``
instead.

Consumers should import directly from submodules::

    from vinylmatch.lib.confidence import calculate_match_confidence
    from vinylmatch.lib.review import can_approve_release
"""
