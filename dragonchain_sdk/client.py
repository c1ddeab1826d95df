"""
HTTP client for the Dragonchain REST API.

Every request is signed with the DC1 HMAC scheme (see signing.py) using
credentials resolved fresh for each call, unless they have been overridden
on the client.
"""

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .configuration import EndpointResolver, resolve_dragonchain_id
from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_QUERY_LIMIT,
    DEFAULT_QUERY_OFFSET,
    ENV_SMART_CONTRACT_ID,
    HEADER_AUTHORIZATION,
    HEADER_CALLBACK_URL,
    HEADER_CONTENT_TYPE,
    HEADER_DRAGONCHAIN,
    HEADER_TIMESTAMP,
    SECRETS_BASE_DIR,
)
from .credentials import CredentialResolver, read_smart_contract_secret
from .exceptions import BadRequestError, ConfigurationError, DragonchainError, HTTPError
from .models import ClientIdentity, Credentials
from .request import RequestDescriptor, get_lucene_query_params
from .signing import HmacAlgorithm, get_authorization_header

SMART_CONTRACT_EXECUTION_ORDERS = ("serial", "parallel")
SMART_CONTRACT_DESIRED_STATES = ("active", "inactive")
INTERCHAIN_BLOCKCHAINS = ("bitcoin", "ethereum")
VERIFICATION_LEVELS = (2, 3, 4, 5)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_string(value, name: str):
    if not isinstance(value, str) or not value:
        raise BadRequestError(f'Parameter "{name}" must be a non-empty string')


def _optional_string(value, name: str):
    if value is not None and not isinstance(value, str):
        raise BadRequestError(f'Parameter "{name}" must be a string')


def _optional_dict(value, name: str):
    if value is not None and not isinstance(value, dict):
        raise BadRequestError(f'Parameter "{name}" must be a dictionary')


def _optional_list(value, name: str):
    if value is not None and not isinstance(value, list):
        raise BadRequestError(f'Parameter "{name}" must be a list')


def _segment(value: str, safe: str = "") -> str:
    """Percent-encode a path segment so the signed path is the one sent on the wire."""
    return quote(value, safe=safe)


def _require_blockchain(blockchain):
    if blockchain not in INTERCHAIN_BLOCKCHAINS:
        raise BadRequestError(f'Parameter "blockchain" must be one of {", ".join(INTERCHAIN_BLOCKCHAINS)}')


class DragonchainClient:
    """
    Client for making authenticated requests to a Dragonchain.

    Every API method returns a dict of the form
    {"status": <http status>, "ok": <2xx?>, "response": <parsed body>}.
    HTTP error statuses are returned, not raised, and a body that is not
    JSON comes back as text. Only transport failures raise HTTPError.
    """

    def __init__(
        self,
        dragonchain_id: Optional[str] = None,
        endpoint: Optional[str] = None,
        auth_key: Optional[str] = None,
        auth_key_id: Optional[str] = None,
        verify: bool = True,
        algorithm: str = HmacAlgorithm.SHA256.value,
        logger: Optional[logging.Logger] = None,
        config_path: Optional[str] = None,
        credential_resolver: Optional[CredentialResolver] = None,
        endpoint_resolver: Optional[EndpointResolver] = None,
        **config
    ):
        """
        Initialize a Dragonchain client.

        The dragonchain id falls back to DRAGONCHAIN_ID and the config file;
        the endpoint falls back to DRAGONCHAIN_ENDPOINT, the config file and
        the matchmaking service.

        Args:
            dragonchain_id: Id of the chain to talk to
            endpoint: Base URL of the chain
            auth_key: HMAC secret key
            auth_key_id: HMAC key id
            verify: Verify the chain's TLS certificate (disable for development only)
            algorithm: One of SHA256, SHA3-256, BLAKE2b512
            logger: Logger for request tracing, silent by default
            config_path: Override for the config file location
            credential_resolver: Replaces the default credential source chain
            endpoint_resolver: Replaces the default endpoint source chain
            **config: Configuration options (timeout, discovery_timeout)

        Raises:
            ConfigurationError: If the algorithm or config is invalid
            NotFoundError: If the dragonchain id or endpoint cannot be resolved
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self.algorithm = HmacAlgorithm.parse(algorithm)
        self.verify = verify
        self.session = requests.Session()

        self.credential_resolver = credential_resolver or CredentialResolver.default(
            auth_key, auth_key_id, config_path, log=self.logger
        )
        self.endpoint_resolver = endpoint_resolver or EndpointResolver.default(
            config_path, self.session, self.config['discovery_timeout'], self.logger
        )
        self._overridden_credentials: Optional[Credentials] = None

        try:
            dragonchain_id = resolve_dragonchain_id(dragonchain_id, config_path, self.logger)
            self.identity = ClientIdentity(
                dragonchain_id, endpoint or self.endpoint_resolver.resolve(dragonchain_id)
            )
        except DragonchainError:
            self.session.close()
            raise

    def _validate_config(self):
        """Validate client configuration."""
        for option in ('timeout', 'discovery_timeout'):
            if not _is_number(self.config[option]) or self.config[option] <= 0:
                raise ConfigurationError(f"{option} must be positive")

    # Identity and credentials

    def set_identity(self, dragonchain_id: str, endpoint: Optional[str] = None):
        """
        Point this client at another chain.

        Id and endpoint are replaced together. Without an endpoint it is
        resolved for the new id. Overridden credentials are kept.
        """
        _require_string(dragonchain_id, "dragonchain_id")
        _optional_string(endpoint, "endpoint")
        self.identity = ClientIdentity(
            dragonchain_id, endpoint or self.endpoint_resolver.resolve(dragonchain_id)
        )

    def override_credentials(self, auth_key_id: str, auth_key: str):
        """Use these credentials for every subsequent request instead of resolving them."""
        credentials = Credentials.from_pair(auth_key, auth_key_id)
        if credentials is None:
            raise BadRequestError("Both auth_key and auth_key_id are required")
        self._overridden_credentials = credentials

    def clear_overridden_credentials(self):
        self._overridden_credentials = None

    def get_credentials(self, dragonchain_id: Optional[str] = None) -> Credentials:
        """
        Raises:
            NotFoundError: If no credentials are available for the chain
        """
        if self._overridden_credentials is not None:
            return self._overridden_credentials
        return self.credential_resolver.resolve(dragonchain_id or self.identity.id)

    def get_secret(self, secret_name: str, secrets_dir: str = SECRETS_BASE_DIR) -> str:
        """Read a secret given to the running smart contract."""
        return read_smart_contract_secret(secret_name, secrets_dir)

    # Request plumbing

    def _build_headers(self, identity: ClientIdentity, descriptor: RequestDescriptor,
                       callback_url: Optional[str] = None) -> Dict[str, str]:
        authorization = get_authorization_header(
            self.get_credentials(identity.id),
            descriptor.method,
            descriptor.path,
            identity.id,
            descriptor.timestamp,
            descriptor.content_type,
            descriptor.body,
            self.algorithm,
        )
        headers = {
            HEADER_DRAGONCHAIN: identity.id,
            HEADER_AUTHORIZATION: authorization,
            HEADER_TIMESTAMP: descriptor.timestamp,
        }
        if descriptor.content_type:
            headers[HEADER_CONTENT_TYPE] = descriptor.content_type
        if callback_url:
            headers[HEADER_CALLBACK_URL] = callback_url
        return headers

    def _parse_response(self, response: requests.Response, parse_json: bool) -> Any:
        """Parse a response body; a body that is not JSON is returned as text."""
        if not parse_json:
            return response.text
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            self.logger.debug("Response body is not JSON, returning text (status %s)", response.status_code)
            return response.text

    def _make_request(self, method: str, path: str, body: Any = None,
                      parse_json: bool = True, callback_url: Optional[str] = None) -> Dict[str, Any]:
        """
        Make an authenticated HTTP request.

        Args:
            method: HTTP method
            path: URL path (relative to the endpoint) including query string
            body: JSON serializable body or raw string
            parse_json: Parse the response as JSON, otherwise return text
            callback_url: Sent as X-Callback-URL when given

        Returns:
            {"status": int, "ok": bool, "response": parsed body}

        Raises:
            HTTPError: If the request fails at the transport level
        """
        identity = self.identity
        descriptor = RequestDescriptor.build(method, path, body)
        headers = self._build_headers(identity, descriptor, callback_url)
        url = f"{identity.endpoint}{descriptor.path}"

        self.logger.debug("[DragonchainClient][%s] ==> %s", descriptor.method, url)
        try:
            response = self.session.request(
                descriptor.method,
                url,
                headers=headers,
                data=descriptor.body.encode("utf-8") if descriptor.body else None,
                verify=self.verify,
                timeout=self.config['timeout'],
            )
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}") from e
        self.logger.debug(
            "[DragonchainClient][%s] <== %s %s %s",
            descriptor.method, url, response.status_code, response.reason,
        )

        return {
            "status": response.status_code,
            "ok": response.ok,
            "response": self._parse_response(response, parse_json),
        }

    def get(self, path: str, parse_json: bool = True) -> Dict[str, Any]:
        """Make authenticated GET request."""
        return self._make_request('GET', path, parse_json=parse_json)

    def post(self, path: str, body: Any = None, callback_url: Optional[str] = None) -> Dict[str, Any]:
        """Make authenticated POST request."""
        return self._make_request('POST', path, body, callback_url=callback_url)

    def put(self, path: str, body: Any = None) -> Dict[str, Any]:
        """Make authenticated PUT request."""
        return self._make_request('PUT', path, body)

    def delete(self, path: str) -> Dict[str, Any]:
        """Make authenticated DELETE request."""
        return self._make_request('DELETE', path)

    # Status

    def get_status(self) -> Dict[str, Any]:
        """Get the status of the chain."""
        return self.get("/status")

    # Transactions

    def get_transaction(self, transaction_id: str) -> Dict[str, Any]:
        _require_string(transaction_id, "transaction_id")
        return self.get(f"/transaction/{_segment(transaction_id)}")

    def query_transactions(self, query: Optional[str] = None, sort: Optional[str] = None,
                           offset: int = DEFAULT_QUERY_OFFSET, limit: int = DEFAULT_QUERY_LIMIT) -> Dict[str, Any]:
        """
        Query transactions with Lucene query-string syntax.

        Example:
            client.query_transactions("tag:(bananas OR apples)")
        """
        return self.get(f"/transaction{get_lucene_query_params(query, sort, offset, limit)}")

    def create_transaction(self, transaction_type: str, payload: Any, tag: Optional[str] = None,
                           callback_url: Optional[str] = None) -> Dict[str, Any]:
        """
        Create a transaction on the chain.

        Args:
            transaction_type: Registered transaction type
            payload: String or JSON serializable object
            tag: Searchable free-form tag
            callback_url: URL the chain calls once the transaction is in a block

        Returns:
            Response containing the new transaction_id
        """
        _require_string(transaction_type, "transaction_type")
        _optional_string(tag, "tag")
        _optional_string(callback_url, "callback_url")
        if payload is None:
            raise BadRequestError('Parameter "payload" is required')
        body = {"version": "1", "txn_type": transaction_type, "payload": payload}
        if tag:
            body["tag"] = tag
        return self.post("/transaction", body, callback_url=callback_url)

    def create_bulk_transaction(self, transaction_list: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Create many transactions in one request.

        Args:
            transaction_list: Dicts with transaction_type, payload and optional tag
        """
        if not isinstance(transaction_list, list) or not transaction_list:
            raise BadRequestError('Parameter "transaction_list" must be a non-empty list')
        bulk = []
        for transaction in transaction_list:
            if not isinstance(transaction, dict):
                raise BadRequestError("Each transaction must be a dictionary")
            _require_string(transaction.get("transaction_type"), "transaction_type")
            if transaction.get("payload") is None:
                raise BadRequestError('Parameter "payload" is required')
            entry = {
                "version": "1",
                "txn_type": transaction["transaction_type"],
                "payload": transaction["payload"],
            }
            if transaction.get("tag"):
                entry["tag"] = transaction["tag"]
            bulk.append(entry)
        return self.post("/transaction_bulk", bulk)

    # Blocks

    def get_block(self, block_id: str) -> Dict[str, Any]:
        _require_string(block_id, "block_id")
        return self.get(f"/block/{_segment(block_id)}")

    def query_blocks(self, query: Optional[str] = None, sort: Optional[str] = None,
                     offset: int = DEFAULT_QUERY_OFFSET, limit: int = DEFAULT_QUERY_LIMIT) -> Dict[str, Any]:
        """Query blocks with Lucene query-string syntax."""
        return self.get(f"/block{get_lucene_query_params(query, sort, offset, limit)}")

    def get_verifications(self, block_id: str, level: Optional[int] = None) -> Dict[str, Any]:
        """Get higher level verifications of a block, optionally for a single level (2-5)."""
        _require_string(block_id, "block_id")
        if level is not None:
            if isinstance(level, bool) or level not in VERIFICATION_LEVELS:
                raise BadRequestError('Parameter "level" must be between 2 and 5')
            return self.get(f"/verifications/{_segment(block_id)}?level={level}")
        return self.get(f"/verifications/{_segment(block_id)}")

    # Smart contracts

    def get_smart_contract(self, smart_contract_id: str) -> Dict[str, Any]:
        _require_string(smart_contract_id, "smart_contract_id")
        return self.get(f"/contract/{_segment(smart_contract_id)}")

    def query_smart_contracts(self, query: Optional[str] = None, sort: Optional[str] = None,
                              offset: int = DEFAULT_QUERY_OFFSET, limit: int = DEFAULT_QUERY_LIMIT) -> Dict[str, Any]:
        """Query smart contracts with Lucene query-string syntax."""
        return self.get(f"/contract{get_lucene_query_params(query, sort, offset, limit)}")

    @staticmethod
    def _smart_contract_fields(args=None, environment_variables=None, secrets=None,
                               schedule_interval_in_seconds=None, cron_expression=None,
                               registry_credentials=None) -> Dict[str, Any]:
        _optional_list(args, "args")
        _optional_dict(environment_variables, "environment_variables")
        _optional_dict(secrets, "secrets")
        _optional_string(cron_expression, "cron_expression")
        _optional_string(registry_credentials, "registry_credentials")
        if schedule_interval_in_seconds is not None and cron_expression is not None:
            raise BadRequestError(
                'Parameters "schedule_interval_in_seconds" and "cron_expression" are mutually exclusive'
            )
        if schedule_interval_in_seconds is not None and (
                not isinstance(schedule_interval_in_seconds, int)
                or isinstance(schedule_interval_in_seconds, bool)
                or schedule_interval_in_seconds <= 0):
            raise BadRequestError('Parameter "schedule_interval_in_seconds" must be a positive integer')

        fields = {}
        if args:
            fields["args"] = args
        if environment_variables:
            fields["env"] = environment_variables
        if secrets:
            fields["secrets"] = secrets
        if schedule_interval_in_seconds is not None:
            fields["seconds"] = schedule_interval_in_seconds
        if cron_expression:
            fields["cron"] = cron_expression
        if registry_credentials:
            fields["auth"] = registry_credentials
        return fields

    def create_smart_contract(
        self,
        transaction_type: str,
        image: str,
        cmd: str,
        args: Optional[List[str]] = None,
        execution_order: str = "parallel",
        environment_variables: Optional[Dict[str, str]] = None,
        secrets: Optional[Dict[str, str]] = None,
        schedule_interval_in_seconds: Optional[int] = None,
        cron_expression: Optional[str] = None,
        registry_credentials: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a smart contract.

        Args:
            transaction_type: Transaction type that invokes the contract
            image: Docker image containing the contract
            cmd: Entrypoint command
            args: Arguments for cmd
            execution_order: "serial" or "parallel"
            environment_variables: Environment for the contract
            secrets: Secrets for the contract
            schedule_interval_in_seconds: Run every N seconds
            cron_expression: Run on a cron schedule (exclusive with the interval)
            registry_credentials: base64 "username:password" for a private registry
        """
        _require_string(transaction_type, "transaction_type")
        _require_string(image, "image")
        _require_string(cmd, "cmd")
        if execution_order not in SMART_CONTRACT_EXECUTION_ORDERS:
            raise BadRequestError('Parameter "execution_order" must be "serial" or "parallel"')
        body = {
            "version": "3",
            "txn_type": transaction_type,
            "image": image,
            "cmd": cmd,
            "execution_order": execution_order,
        }
        body.update(self._smart_contract_fields(
            args, environment_variables, secrets,
            schedule_interval_in_seconds, cron_expression, registry_credentials,
        ))
        return self.post("/contract", body)

    def update_smart_contract(
        self,
        smart_contract_id: str,
        image: Optional[str] = None,
        cmd: Optional[str] = None,
        args: Optional[List[str]] = None,
        execution_order: Optional[str] = None,
        desired_state: Optional[str] = None,
        environment_variables: Optional[Dict[str, str]] = None,
        secrets: Optional[Dict[str, str]] = None,
        schedule_interval_in_seconds: Optional[int] = None,
        cron_expression: Optional[str] = None,
        registry_credentials: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Update fields of an existing smart contract. Only given fields are sent."""
        _require_string(smart_contract_id, "smart_contract_id")
        _optional_string(image, "image")
        _optional_string(cmd, "cmd")
        if execution_order is not None and execution_order not in SMART_CONTRACT_EXECUTION_ORDERS:
            raise BadRequestError('Parameter "execution_order" must be "serial" or "parallel"')
        if desired_state is not None and desired_state not in SMART_CONTRACT_DESIRED_STATES:
            raise BadRequestError('Parameter "desired_state" must be "active" or "inactive"')
        body = {"version": "3", "dcrn": "SmartContract::L1::Update"}
        if image:
            body["image"] = image
        if cmd:
            body["cmd"] = cmd
        if execution_order:
            body["execution_order"] = execution_order
        if desired_state:
            body["desired_state"] = desired_state
        body.update(self._smart_contract_fields(
            args, environment_variables, secrets,
            schedule_interval_in_seconds, cron_expression, registry_credentials,
        ))
        return self.put(f"/contract/{_segment(smart_contract_id)}", body)

    def delete_smart_contract(self, smart_contract_id: str) -> Dict[str, Any]:
        _require_string(smart_contract_id, "smart_contract_id")
        return self.delete(f"/contract/{_segment(smart_contract_id)}")

    def get_smart_contract_object(self, key: str, smart_contract_id: Optional[str] = None,
                                  parse_json: bool = False) -> Dict[str, Any]:
        """
        Read an object from a smart contract's heap.

        The object is returned as raw text unless parse_json is set.
        smart_contract_id defaults to SMART_CONTRACT_ID when running as a contract.
        """
        _require_string(key, "key")
        smart_contract_id = smart_contract_id or os.environ.get(ENV_SMART_CONTRACT_ID)
        _require_string(smart_contract_id, "smart_contract_id")
        return self.get(f"/get/{_segment(smart_contract_id)}/{_segment(key, safe='/')}", parse_json=parse_json)

    def list_smart_contract_objects(self, prefix_key: Optional[str] = None,
                                    smart_contract_id: Optional[str] = None) -> Dict[str, Any]:
        """List the keys in a smart contract's heap, optionally under a folder."""
        _optional_string(prefix_key, "prefix_key")
        if prefix_key and prefix_key.endswith("/"):
            raise BadRequestError('Parameter "prefix_key" cannot end with "/"')
        smart_contract_id = smart_contract_id or os.environ.get(ENV_SMART_CONTRACT_ID)
        _require_string(smart_contract_id, "smart_contract_id")
        return self.get(f"/list/{_segment(smart_contract_id)}/{_segment(prefix_key or '', safe='/')}")

    # Transaction types

    def create_transaction_type(self, transaction_type: str,
                                custom_indexes: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        _require_string(transaction_type, "transaction_type")
        _optional_list(custom_indexes, "custom_indexes")
        body = {"version": "1", "txn_type": transaction_type}
        if custom_indexes:
            body["custom_indexes"] = custom_indexes
        return self.post("/transaction-type", body)

    def get_transaction_type(self, transaction_type: str) -> Dict[str, Any]:
        _require_string(transaction_type, "transaction_type")
        return self.get(f"/transaction-type/{_segment(transaction_type)}")

    def list_transaction_types(self) -> Dict[str, Any]:
        return self.get("/transaction-types")

    def update_transaction_type(self, transaction_type: str,
                                custom_indexes: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Replace the custom indexes of a registered transaction type."""
        _require_string(transaction_type, "transaction_type")
        if not isinstance(custom_indexes, list):
            raise BadRequestError('Parameter "custom_indexes" must be a list')
        return self.put(f"/transaction-type/{_segment(transaction_type)}",
                        {"version": "1", "custom_indexes": custom_indexes})

    def delete_transaction_type(self, transaction_type: str) -> Dict[str, Any]:
        _require_string(transaction_type, "transaction_type")
        return self.delete(f"/transaction-type/{_segment(transaction_type)}")

    # Interchain

    def create_bitcoin_interchain(self, name: str, testnet: Optional[bool] = None,
                                  private_key: Optional[str] = None, rpc_address: Optional[str] = None,
                                  rpc_authorization: Optional[str] = None,
                                  utxo_scan: Optional[bool] = None) -> Dict[str, Any]:
        """
        Register a bitcoin network for interchain signing.

        Args:
            name: Name for this network
            testnet: Use testnet instead of mainnet
            private_key: base64 or WIF private key, generated by the chain if omitted
            rpc_address: Address of a bitcoin node
            rpc_authorization: base64 "username:password" for the node
            utxo_scan: Rescan the address for UTXOs (slow)
        """
        _require_string(name, "name")
        _optional_string(private_key, "private_key")
        _optional_string(rpc_address, "rpc_address")
        _optional_string(rpc_authorization, "rpc_authorization")
        for flag, flag_name in ((testnet, "testnet"), (utxo_scan, "utxo_scan")):
            if flag is not None and not isinstance(flag, bool):
                raise BadRequestError(f'Parameter "{flag_name}" must be a boolean')
        body = {"version": "1", "name": name}
        if testnet is not None:
            body["testnet"] = testnet
        if private_key:
            body["private_key"] = private_key
        if rpc_address:
            body["rpc_address"] = rpc_address
        if rpc_authorization:
            body["rpc_authorization"] = rpc_authorization
        if utxo_scan is not None:
            body["utxo_scan"] = utxo_scan
        return self.post("/interchains/bitcoin", body)

    def create_ethereum_interchain(self, name: str, private_key: Optional[str] = None,
                                   rpc_address: Optional[str] = None,
                                   chain_id: Optional[int] = None) -> Dict[str, Any]:
        """Register an ethereum network for interchain signing."""
        _require_string(name, "name")
        _optional_string(private_key, "private_key")
        _optional_string(rpc_address, "rpc_address")
        if chain_id is not None and (not isinstance(chain_id, int) or isinstance(chain_id, bool)):
            raise BadRequestError('Parameter "chain_id" must be an integer')
        body = {"version": "1", "name": name}
        if private_key:
            body["private_key"] = private_key
        if rpc_address:
            body["rpc_address"] = rpc_address
        if chain_id is not None:
            body["chain_id"] = chain_id
        return self.post("/interchains/ethereum", body)

    def get_interchain_network(self, blockchain: str, name: str) -> Dict[str, Any]:
        _require_blockchain(blockchain)
        _require_string(name, "name")
        return self.get(f"/interchains/{blockchain}/{_segment(name)}")

    def list_interchain_networks(self, blockchain: str) -> Dict[str, Any]:
        _require_blockchain(blockchain)
        return self.get(f"/interchains/{blockchain}")

    def delete_interchain_network(self, blockchain: str, name: str) -> Dict[str, Any]:
        _require_blockchain(blockchain)
        _require_string(name, "name")
        return self.delete(f"/interchains/{blockchain}/{_segment(name)}")

    def sign_bitcoin_transaction(self, name: str, satoshis_per_byte: Optional[int] = None,
                                 data: Optional[str] = None, change_address: Optional[str] = None,
                                 outputs: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Have the chain sign a bitcoin transaction with a registered network's key.

        Args:
            name: Registered bitcoin network
            satoshis_per_byte: Fee rate
            data: Data to embed with OP_RETURN
            change_address: Address for change, the network's own address if omitted
            outputs: [{"to": <address>, "value": <btc amount>}, ...]
        """
        _require_string(name, "name")
        _optional_string(data, "data")
        _optional_string(change_address, "change_address")
        _optional_list(outputs, "outputs")
        if satoshis_per_byte is not None and (
                not isinstance(satoshis_per_byte, int) or isinstance(satoshis_per_byte, bool)):
            raise BadRequestError('Parameter "satoshis_per_byte" must be an integer')
        body = {"version": "1"}
        if outputs:
            for output in outputs:
                if not isinstance(output, dict) or not isinstance(output.get("to"), str) \
                        or not _is_number(output.get("value")):
                    raise BadRequestError('Each output must have a string "to" and a numeric "value"')
            body["outputs"] = [{"to": o["to"], "value": o["value"]} for o in outputs]
        if satoshis_per_byte is not None:
            body["fee"] = satoshis_per_byte
        if data:
            body["data"] = data
        if change_address:
            body["change"] = change_address
        return self.post(f"/interchains/bitcoin/{_segment(name)}/transaction", body)

    def sign_ethereum_transaction(self, name: str, to: str, value: str, data: Optional[str] = None,
                                  gas_price: Optional[str] = None, gas: Optional[str] = None) -> Dict[str, Any]:
        """
        Have the chain sign an ethereum transaction with a registered network's key.

        value, data, gas_price and gas are hex strings.
        """
        _require_string(name, "name")
        _require_string(to, "to")
        _require_string(value, "value")
        _optional_string(data, "data")
        _optional_string(gas_price, "gas_price")
        _optional_string(gas, "gas")
        transaction = {"to": to, "value": value}
        if data:
            transaction["data"] = data
        if gas_price:
            transaction["gasPrice"] = gas_price
        if gas:
            transaction["gas"] = gas
        return self.post(f"/interchains/ethereum/{_segment(name)}/transaction",
                         {"version": "1", "transaction": transaction})

    # API keys

    def create_api_key(self, nickname: Optional[str] = None) -> Dict[str, Any]:
        _optional_string(nickname, "nickname")
        body = {"nickname": nickname} if nickname else None
        return self.post("/api-key", body)

    def get_api_key(self, key_id: str) -> Dict[str, Any]:
        _require_string(key_id, "key_id")
        return self.get(f"/api-key/{_segment(key_id)}")

    def list_api_keys(self) -> Dict[str, Any]:
        return self.get("/api-key")

    def update_api_key(self, key_id: str, nickname: str) -> Dict[str, Any]:
        _require_string(key_id, "key_id")
        _require_string(nickname, "nickname")
        return self.put(f"/api-key/{_segment(key_id)}", {"nickname": nickname})

    def delete_api_key(self, key_id: str) -> Dict[str, Any]:
        _require_string(key_id, "key_id")
        return self.delete(f"/api-key/{_segment(key_id)}")

    # Node configuration

    def update_matchmaking_config(self, asking_price: Optional[float] = None,
                                  broadcast_interval: Optional[float] = None) -> Dict[str, Any]:
        """
        Update matchmaking data of a verification node.

        Args:
            asking_price: Price in DRGN (0.0001-1000) charged for verifications (L2-L5)
            broadcast_interval: Broadcast interval in hours (L5 only)
        """
        if asking_price is None and broadcast_interval is None:
            raise BadRequestError('One of "asking_price" or "broadcast_interval" is required')
        matchmaking = {}
        if asking_price is not None:
            if not _is_number(asking_price) or asking_price < 0.0001 or asking_price > 1000:
                raise BadRequestError("asking_price must be between 0.0001 and 1000")
            matchmaking["askingPrice"] = asking_price
        if broadcast_interval is not None:
            if not _is_number(broadcast_interval) or broadcast_interval <= 0:
                raise BadRequestError("broadcast_interval must be a positive number")
            matchmaking["broadcastInterval"] = broadcast_interval
        return self.put("/update-matchmaking-data", {"matchmaking": matchmaking})

    def update_dragonnet_config(self, maximum_prices: Dict[str, float]) -> Dict[str, Any]:
        """
        Update the maximum price an L1 pays per verification level.

        Args:
            maximum_prices: e.g. {"l2": 10, "l5": 1.5}, each between 0 and 1000
        """
        _optional_dict(maximum_prices, "maximum_prices")
        dragonnet = {}
        for level in VERIFICATION_LEVELS:
            price = (maximum_prices or {}).get(f"l{level}")
            if price is None:
                continue
            if not _is_number(price) or price < 0 or price > 1000:
                raise BadRequestError("maximum price must be between 0 and 1000")
            dragonnet[f"l{level}"] = {"maximumPrice": price}
        if not dragonnet:
            raise BadRequestError("No valid levels provided")
        return self.put("/update-matchmaking-data", {"dragonnet": dragonnet})

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
