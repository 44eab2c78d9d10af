from .writer import BundleOutput, write_bundle

__all__ = ["BundleOutput", "write_bundle"]
