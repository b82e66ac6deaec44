"""Download the corpus of C-Rust program pairs.

Metadata files are read from the metadata directories, every repository
they reference is cloned once into ``repository_clones/<language>/`` and
the listed source paths are copied into
``program_pairs/<program>/{c-program,rust-program}``.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import git
from tqdm import tqdm

from crpairs.config import CorpusPaths, sanitize_path_component
from crpairs.corpus.parser import parse
from crpairs.corpus.schema import Language, Metadata, Program, ProgramPair
from crpairs.errors import DownloaderError, ParserError
from crpairs.logging import get_logger

logger = get_logger("corpus.downloader")

# Clones ignore the user's global and system git configuration.
GIT_ENVIRONMENT = {"GIT_CONFIG_GLOBAL": os.devnull, "GIT_CONFIG_NOSYSTEM": "1"}

STAGE_LABELS = {
    git.RemoteProgress.COUNTING: "Counting objects",
    git.RemoteProgress.COMPRESSING: "Compressing objects",
    git.RemoteProgress.RECEIVING: "Receiving objects",
    git.RemoteProgress.RESOLVING: "Resolving deltas",
    git.RemoteProgress.CHECKING_OUT: "Checking out files",
}


class CloneProgress(git.RemoteProgress):
    """Mirror git's clone progress onto a tqdm bar."""

    def __init__(self, repository_name: str) -> None:
        super().__init__()
        self.repository_name = repository_name
        self.bar = tqdm(desc=f"Cloning {repository_name}", unit="obj", leave=False)

    def update(self, op_code, cur_count, max_count=None, message=""):
        stage = STAGE_LABELS.get(op_code & self.OP_MASK)
        if stage:
            self.bar.set_description(f"{self.repository_name}: {stage}")
        if max_count:
            self.bar.total = int(max_count)
        self.bar.n = int(cur_count)
        self.bar.refresh()

    def close(self) -> None:
        self.bar.close()


def get_repository_name(repository_url: str) -> str:
    path = urlparse(repository_url).path or repository_url
    name = PurePosixPath(path.rstrip("/")).name
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise DownloaderError(f"Failed to get repository name from URL '{repository_url}'")
    return name


def metadata_files(directory: Path) -> list[Path]:
    try:
        return sorted((p for p in directory.iterdir() if p.is_file() and p.suffix == ".json"), key=lambda p: p.name)
    except OSError as exc:
        raise DownloaderError(f"Failed to read '{directory}': {exc}") from exc


def clone_repository(repository_url: str, destination: Path) -> Path:
    """Open the clone at ``destination`` or make a shallow clone there.

    Returns the working tree directory. Every git or OS failure, a missing
    git executable included, is raised as DownloaderError.
    """

    try:
        repository = git.Repo(destination)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError):
        repository = _shallow_clone(repository_url, destination)
    except (git.GitError, OSError) as exc:
        raise DownloaderError(f"Failed to open repository '{destination}': {exc}") from exc

    if repository.working_tree_dir is None:
        raise DownloaderError(f"Failed to find working directory for repository '{destination.name}'")
    return Path(repository.working_tree_dir)


def _shallow_clone(repository_url: str, destination: Path) -> git.Repo:
    progress = CloneProgress(destination.name)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        return git.Repo.clone_from(
            repository_url,
            destination,
            progress=progress,
            env=GIT_ENVIRONMENT,
            depth=1,
        )
    # GitCommandNotFound is an OSError as well as a GitError.
    except (git.GitError, OSError) as exc:
        raise DownloaderError(f"Failed to clone repository '{repository_url}': {exc}") from exc
    finally:
        progress.close()


def copy_source_path(repository_directory: Path, source_path: str, program_directory: Path) -> None:
    file_name = PurePosixPath(source_path).name
    if not file_name:
        raise DownloaderError(f"Failed to get file name for path '{source_path}'")

    source = repository_directory / source_path
    destination = program_directory / file_name
    try:
        if source.is_dir():
            shutil.copytree(source, program_directory, dirs_exist_ok=True)
        else:
            shutil.copy2(source, destination)
    except OSError as exc:
        raise DownloaderError(f"Failed to copy '{source}' to '{destination}': {exc}") from exc


def download_files(program_name: str, program: Program, program_directory: Path, paths: CorpusPaths) -> None:
    """Clone ``program``'s repository if needed and stage its source paths."""

    repository_name = get_repository_name(program.repository_url)
    clone_directory = paths.repository_clones_dir / program.language.value / repository_name
    repository_directory = clone_repository(program.repository_url, clone_directory)

    for source_path in program.source_paths:
        copy_source_path(repository_directory, source_path, program_directory)

    logger.info("Downloaded '%s' (%s)", program_name, program.language.value)


def program_directory(pair: ProgramPair, language: Language, paths: CorpusPaths) -> Path:
    return paths.program_pairs_dir / sanitize_path_component(pair.program_name) / f"{language.value}-program"


def download_program_pair(pair: ProgramPair, paths: CorpusPaths) -> None:
    for program in pair.programs():
        destination = program_directory(pair, program.language, paths)
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DownloaderError(f"Failed to create '{destination}': {exc}") from exc
        download_files(pair.program_name, program, destination, paths)


def download_from_metadata(metadata: Metadata, paths: CorpusPaths) -> int:
    """Download every pair in ``metadata``; failures are logged and skipped.

    Returns the number of pairs downloaded.
    """

    downloaded = 0
    for pair in metadata.pairs:
        try:
            download_program_pair(pair, paths)
        except DownloaderError as exc:
            logger.error("Failed to download '%s': %s", pair.program_name, exc)
            continue
        downloaded += 1
    return downloaded


def download_program_pairs(paths: CorpusPaths, *, demo: bool = False) -> int:
    """Download the pairs of every metadata file; returns the number downloaded."""

    files = [path for directory in paths.metadata_dirs(demo) for path in metadata_files(directory)]
    downloaded = 0

    with tqdm(total=len(files), desc="Processing metadata files", unit="file") as bar:
        for path in files:
            try:
                metadata = parse(path)
            except ParserError as exc:
                logger.error("Failed to parse '%s': %s", path, exc)
            else:
                downloaded += download_from_metadata(metadata, paths)
            bar.update(1)

    logger.info("Downloaded %d program pair(s) from %d metadata file(s)", downloaded, len(files))
    return downloaded
