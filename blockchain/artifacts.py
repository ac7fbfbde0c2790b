"""
Artifact Loader
Reads Hardhat compilation artifacts (ABI + bytecode) from disk
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from .exceptions import ArtifactNotFoundError, InvalidArtifactError


class ContractArtifact:
    """Compiled contract as produced by `npx hardhat compile`"""

    def __init__(
        self,
        contract_name: str,
        source_name: str,
        abi: List[Dict],
        bytecode: str,
        deployed_bytecode: str = '0x',
        link_references: Optional[Dict] = None,
        path: Optional[Path] = None
    ):
        self.contract_name = contract_name
        self.source_name = source_name
        self.abi = abi
        self.bytecode = bytecode
        self.deployed_bytecode = deployed_bytecode
        self.link_references = link_references or {}
        self.path = path

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"

    @classmethod
    def from_json(cls, data: Dict, path: Optional[Path] = None) -> 'ContractArtifact':
        """
        Build an artifact from a parsed Hardhat artifact file

        Args:
            data: Parsed JSON
            path: File the JSON came from (for error messages)

        Returns:
            ContractArtifact
        """
        where = path or data.get('contractName', '<artifact>')

        if 'abi' not in data or not isinstance(data['abi'], list):
            raise InvalidArtifactError(f"Artifact {where} has no ABI")

        bytecode = data.get('bytecode') or '0x'
        if not bytecode.startswith('0x'):
            bytecode = '0x' + bytecode

        return cls(
            contract_name=data.get('contractName', ''),
            source_name=data.get('sourceName', ''),
            abi=data['abi'],
            bytecode=bytecode,
            deployed_bytecode=data.get('deployedBytecode') or '0x',
            link_references=data.get('linkReferences'),
            path=path
        )


class ArtifactLoader:
    """
    Resolves contract names to Hardhat artifacts

    Accepts bare names (`Auction`) or fully qualified names
    (`contracts/Auction.sol:Auction`).
    """

    def __init__(self, artifacts_dir='artifacts'):
        """
        Initialize Artifact Loader

        Args:
            artifacts_dir: Hardhat artifacts root
        """
        self.artifacts_dir = Path(artifacts_dir)

    def load(self, name: str) -> ContractArtifact:
        """
        Load a deployable artifact

        Args:
            name: Bare or fully qualified contract name

        Returns:
            ContractArtifact with non-empty, fully linked bytecode
        """
        path = self.find(name)

        with open(path, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidArtifactError(f"Artifact {path} is not valid JSON: {e}") from e

        artifact = ContractArtifact.from_json(data, path=path)
        self._check_deployable(artifact)

        logger.debug(f"Loaded artifact {artifact.fully_qualified_name} from {path}")
        return artifact

    def find(self, name: str) -> Path:
        """
        Locate the artifact file for a contract name

        Args:
            name: Bare or fully qualified contract name

        Returns:
            Path to the artifact JSON
        """
        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
            path = self.artifacts_dir / source_name / f"{contract_name}.json"
            if not path.is_file():
                raise ArtifactNotFoundError(
                    f"Artifact for {name} not found at {path}. "
                    "Run 'npx hardhat compile' first"
                )
            return path

        candidates = self._search(name)

        if not candidates:
            raise ArtifactNotFoundError(
                f"Artifact for contract {name} not found under {self.artifacts_dir}. "
                "Run 'npx hardhat compile' first"
            )

        if len(candidates) > 1:
            options = ', '.join(self._qualified_name(p) for p in candidates)
            raise InvalidArtifactError(
                f"Multiple artifacts named {name}, use a fully qualified name: {options}"
            )

        return candidates[0]

    def _search(self, contract_name: str) -> List[Path]:
        """Find every artifact file named after the contract"""
        root = self.artifacts_dir / 'contracts'
        if not root.is_dir():
            root = self.artifacts_dir
        if not root.is_dir():
            return []

        return sorted(
            path for path in root.rglob(f"{contract_name}.json")
            if 'build-info' not in path.parts
        )

    def _qualified_name(self, path: Path) -> str:
        source = path.parent.relative_to(self.artifacts_dir).as_posix()
        return f"{source}:{path.stem}"

    def _check_deployable(self, artifact: ContractArtifact):
        name = artifact.fully_qualified_name

        if artifact.bytecode in ('0x', ''):
            raise InvalidArtifactError(
                f"{name} has no creation bytecode (abstract contract or interface?)"
            )

        if artifact.link_references:
            libraries = ', '.join(
                lib
                for source in artifact.link_references.values()
                for lib in source
            )
            raise InvalidArtifactError(f"{name} needs unlinked libraries: {libraries}")
