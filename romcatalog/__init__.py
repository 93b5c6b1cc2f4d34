"""
romcatalog - ROM catalog engine

Indexes ROM files across per-console directories into a searchable,
sortable, paginated catalog and attaches preview artwork fetched from
libretro-thumbnails.
"""

__version__ = "0.1.0"
