"""Domain-specific library modules.

Modules here import ammeta domain models and provide higher-level logic
(JSON-LD discovery, etc.). Pure utilities that don't depend on domain
models live in ``ammeta.utils`` instead.

Consumers should import directly from submodules::

    from ammeta.lib.jsonld import find_music_entity
"""
