from .base import ArchiveExtractor  # noqa: F401
from .installer import ArchiveInstaller, extractor_for  # noqa: F401
from .tar_extractor import TarGzExtractor  # noqa: F401
from .zip_extractor import ZipExtractor, sanitize_member_name  # noqa: F401
