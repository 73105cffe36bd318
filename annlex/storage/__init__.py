from .index_store import IndexManifest, write_index, read_index
