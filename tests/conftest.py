"""
Shared fixtures
"""

import json
import pytest
from loguru import logger

ENV_VARS = [
    'DEPLOY_NETWORK',
    'RPC_URL',
    'DEPLOYER_PRIVATE_KEY',
    'ARTIFACTS_DIR',
    'DEPLOY_TIMEOUT',
    'GAS_BUFFER',
    'MAX_FEE_GWEI',
    'LOG_LEVEL',
    'LOG_FILE',
    'SEPOLIA_RPC_URL',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the developer's .env"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    # sinks may point at a closed capture stream
    logger.remove()


def write_artifact(root, name='Auction', source=None, bytecode='0x6080604052', abi=None,
                   link_references=None):
    """Write a Hardhat-style artifact and return its path"""
    source = source or f"contracts/{name}.sol"
    directory = root / source
    directory.mkdir(parents=True, exist_ok=True)

    data = {
        '_format': 'hh-sol-artifact-1',
        'contractName': name,
        'sourceName': source,
        'abi': abi if abi is not None else [],
        'bytecode': bytecode,
        'deployedBytecode': '0x6080',
        'linkReferences': link_references or {},
        'deployedLinkReferences': {}
    }

    path = directory / f"{name}.json"
    path.write_text(json.dumps(data))
    (directory / f"{name}.dbg.json").write_text(json.dumps({'_format': 'hh-sol-dbg-1'}))
    return path


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts root holding a compiled Auction contract"""
    root = tmp_path / 'artifacts'
    write_artifact(root)
    return root
