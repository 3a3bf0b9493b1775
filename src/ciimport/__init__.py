from .importer import Importer, run_import
from .model import ImportContext, GitInfo
from .errors import CIImportError, ImportFailure

__all__ = ["Importer", "run_import", "ImportContext", "GitInfo", "CIImportError", "ImportFailure"]
