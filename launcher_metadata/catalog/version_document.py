"""
Accessors over a parsed version document.
"""
from typing import List, Optional

from resolution import ArtifactEntry, ArtifactSelector, TargetEnvironment

from .models import AssetIndexReference, VersionDocument


class VersionDocumentView:
    """Convenience queries over one VersionDocument."""

    def __init__(
        self,
        document: Optional[VersionDocument],
        selector: Optional[ArtifactSelector] = None
    ):
        if document is None:
            raise ValueError("The version document parameter cannot be None.")
        self.document = document
        self.selector = selector or ArtifactSelector()

    def java_major_version(self) -> Optional[int]:
        java = self.document.java_version
        return java.major_version if java else None

    def get_asset_index(self) -> AssetIndexReference:
        if self.document.asset_index is None:
            raise ValueError(f"Version {self.document.id} has no asset index")
        return self.document.asset_index

    def get_main_class(self) -> str:
        return self.document.main_class

    def get_libraries(
        self,
        host_os: Optional[str] = None,
        target_env: Optional[TargetEnvironment] = None
    ) -> List[ArtifactEntry]:
        """
        Libraries of this version.

        Returns every library when target_env is omitted, otherwise only the
        libraries whose rules allow the target.
        """
        return self.selector.select_applicable(
            self.document.libraries, host_os, target_env
        )
