"""
Tests for the deployment entry points
"""

import sys
import pytest
from unittest.mock import Mock
from loguru import logger
from web3 import Web3

import deploy
from blockchain import DeploymentFailedError, NetworkConnectionError
from scripts import check_setup, deploy_auction

AUCTION_ADDRESS = Web3.to_checksum_address('0x5fbdb2315678afecb367f032d93f642f64180aa3')
NODE_ACCOUNT = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'


@pytest.fixture
def fake_deployer(monkeypatch):
    """Deployer whose Auction deployment confirms at AUCTION_ADDRESS"""
    deployer = Mock()
    auction = deployer.deploy_contract.return_value
    auction.target = AUCTION_ADDRESS

    monkeypatch.setattr(deploy_auction, 'NetworkManager', Mock())
    monkeypatch.setattr(
        deploy_auction,
        'ContractDeployer',
        Mock(**{'from_settings.return_value': deployer})
    )
    return deployer


class TestDeployAuction:
    """Test the Auction deployment script"""

    def test_success_prints_address(self, fake_deployer, capsys):
        exit_code = deploy_auction.main()

        out, _ = capsys.readouterr()
        assert exit_code == 0
        assert out == f"Auction contract deployed to {AUCTION_ADDRESS}\n"
        assert Web3.is_checksum_address(out.split()[-1])

    def test_waits_before_reading_address(self, fake_deployer):
        deploy_auction.main()

        fake_deployer.deploy_contract.assert_called_once_with('Auction')
        fake_deployer.deploy_contract.return_value.wait_for_deployment.assert_called_once_with()

    def test_deployment_failure(self, fake_deployer, capsys):
        fake_deployer.deploy_contract.side_effect = DeploymentFailedError('Auction deployment 0xaa reverted')

        exit_code = deploy_auction.main()

        out, err = capsys.readouterr()
        assert exit_code == 1
        assert out == ''
        assert 'Auction deployment 0xaa reverted' in err

    def test_confirmation_failure(self, fake_deployer, capsys):
        auction = fake_deployer.deploy_contract.return_value
        auction.wait_for_deployment.side_effect = RuntimeError('node went away')

        exit_code = deploy_auction.main()

        out, err = capsys.readouterr()
        assert exit_code == 1
        assert out == ''
        assert 'node went away' in err

    def test_network_failure(self, monkeypatch, capsys):
        manager = Mock()
        manager.return_value.get_web3.side_effect = NetworkConnectionError('Failed to connect')
        monkeypatch.setattr(deploy_auction, 'NetworkManager', manager)

        assert deploy_auction.main() == 1
        assert 'Failed to connect' in capsys.readouterr().err

    def test_invalid_settings(self, monkeypatch, capsys):
        monkeypatch.setenv('DEPLOY_TIMEOUT', 'never')

        assert deploy_auction.main() == 1
        assert 'DEPLOY_TIMEOUT' in capsys.readouterr().err

    def test_invalid_log_level(self, fake_deployer, monkeypatch, capsys):
        # stands in for loguru's default stderr sink
        logger.add(sys.stderr, format="{message}")
        monkeypatch.setenv('LOG_LEVEL', 'LOUD')

        exit_code = deploy_auction.main()

        out, err = capsys.readouterr()
        assert exit_code == 1
        assert out == ''
        assert 'Deployment failed: LOG_LEVEL' in err
        fake_deployer.deploy_contract.assert_not_called()


class TestLauncher:
    """Test the top-level deploy.py wrapper"""

    def test_runs_deploy_script(self, monkeypatch):
        run = Mock(return_value=Mock(returncode=0))
        monkeypatch.setattr(deploy.subprocess, 'run', run)

        assert deploy.run() == 0

        command = run.call_args[0][0]
        assert command[1:] == ['-m', 'scripts.deploy_auction']
        assert run.call_args[1]['cwd'] == deploy.PROJECT_ROOT

    def test_propagates_exit_code(self, monkeypatch):
        monkeypatch.setattr(deploy.subprocess, 'run', Mock(return_value=Mock(returncode=1)))

        assert deploy.run() == 1


class TestCheckSetup:
    """Test the preflight check script"""

    @pytest.fixture
    def w3(self, monkeypatch, artifacts_dir):
        monkeypatch.setenv('ARTIFACTS_DIR', str(artifacts_dir))

        w3 = Mock()
        w3.eth.chain_id = 31337
        w3.eth.block_number = 12
        w3.eth.accounts = [NODE_ACCOUNT]
        w3.eth.get_balance.return_value = 10 ** 22

        manager = Mock()
        manager.return_value.get_web3.return_value = w3
        monkeypatch.setattr(check_setup, 'NetworkManager', manager)
        return w3

    def test_all_checks_pass(self, w3):
        assert check_setup.main() == 0

    def test_unfunded_deployer(self, w3):
        w3.eth.get_balance.return_value = 0

        assert check_setup.main() == 1

    def test_missing_artifact(self, w3, monkeypatch, tmp_path):
        monkeypatch.setenv('ARTIFACTS_DIR', str(tmp_path / 'empty'))

        assert check_setup.main() == 1

    def test_invalid_log_level(self, w3, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'LOUD')

        assert check_setup.main() == 1

    def test_network_down_skips_balance(self, w3, monkeypatch):
        manager = Mock()
        manager.return_value.get_web3.side_effect = NetworkConnectionError('down')
        monkeypatch.setattr(check_setup, 'NetworkManager', manager)

        state = {}
        assert check_setup.check_settings(state)
        with pytest.raises(NetworkConnectionError):
            check_setup.check_network(state)
        assert not check_setup.check_deployer_balance(state)
