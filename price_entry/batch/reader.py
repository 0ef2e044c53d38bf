"""Read entry lines from a text file or an archive."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field

from price_entry.common.logger import logger


class EntryFileReader(BaseModel):
    """
    Load free-text entry lines from disk.

    Supported inputs:
    - plain .txt files
    - .zip, .tar.xz and .7z archives (the first .txt member is read)
    """

    model_config = ConfigDict(frozen=True)

    encoding: str = Field(default="utf-8", description="Text encoding of the entry file")

    def read_lines(self, input_file: Path) -> List[str]:
        """
        Return the non-empty, stripped lines of an entry file or archive.

        :param Path input_file: Path to the input file or archive

        :return: List of entry lines
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        if input_file.suffix == ".txt":
            content = input_file.read_text(encoding=self.encoding)
        else:
            content = self._extract_archive(input_file)

        lines = [line.strip() for line in content.splitlines() if line.strip()]
        logger.info(f"📄 Read {len(lines)} entries from {input_file}")
        return lines

    def _extract_archive(self, archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content as a string.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found or format is unsupported
        """
        # Create a temporary directory for safe extraction
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            if archive_path.suffix == ".zip":
                with zipfile.ZipFile(archive_path, "r") as zf:
                    txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in zip archive")
                    zf.extract(txt_files[0], path=tmpdir_path)
                    return (tmpdir_path / txt_files[0]).read_text(encoding=self.encoding)

            elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                with tarfile.open(archive_path, "r:xz") as tf:
                    members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                    if not members:
                        raise ValueError("📄❌ No .txt file found in tar.xz archive")
                    tf.extract(members[0], path=tmpdir_path, filter="data")
                    return (tmpdir_path / members[0].name).read_text(encoding=self.encoding)

            elif archive_path.suffix == ".7z":
                with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                    txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in 7z archive")
                    archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                    return (tmpdir_path / txt_files[0]).read_text(encoding=self.encoding)

            else:
                raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")
