# Python Substrate Docs Library
#
# Copyright 2018-2024 Stichting Polkascan (Polkascan Foundation).
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import asyncio
import json
import logging
from typing import Optional

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .constants import METADATA_RPC_METHOD, NORMAL_CLOSURE_CODE, ABNORMAL_CLOSURE_CODE, DEFAULT_TIMEOUT, \
    DEFAULT_CLOSE_TIMEOUT
from .exceptions import ConnectionTimeout, TransportError, AbnormalClosure, ProtocolError, MalformedResponse

__all__ = ['RpcSession', 'WebsocketTransport']

logger = logging.getLogger(__name__)


class RpcSession:

    def __init__(self, url: str, request_id: int, timeout: float = DEFAULT_TIMEOUT, method: str = METADATA_RPC_METHOD,
                 params: Optional[list] = None, ws_options: Optional[dict] = None):
        """
        One websocket connection carrying exactly one JSON-RPC request. A session is single-use: it is settled by
        the first outcome (result, error or timeout) and its connection is closed on every exit path.

        Parameters
        ----------
        url: websocket URI of the node, e.g. wss://rpc.polkadot.io
        request_id: id of the JSON-RPC request, used to match the response
        timeout: deadline in seconds for connecting and receiving the matching response
        method: method of the JSONRPC request
        params: a list containing the parameters of the JSONRPC request
        ws_options: dict of options to pass to the websockets connect function
        """
        self.url = url
        self.request_id = request_id
        self.timeout = timeout
        self.method = method
        self.params = params or []
        self.ws_options = ws_options or {}

        self.__used = False

    @staticmethod
    def debug_message(message: str):
        logger.debug(message)

    def create_request_payload(self) -> dict:
        return {
            "jsonrpc": "2.0",
            "method": self.method,
            "params": self.params,
            "id": self.request_id
        }

    async def request(self):
        """
        Connects, sends the request and waits for the matching response

        Returns
        -------
        The `result` field of the JSON-RPC response
        """
        if self.__used:
            raise RuntimeError("RpcSession can only be used for a single request")

        self.__used = True

        try:
            return await asyncio.wait_for(self.__exchange(), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ConnectionTimeout(f"Connection timeout to {self.url}")

    async def __exchange(self):
        websocket = None
        settled = False

        try:
            self.debug_message(f"Connecting to {self.url} ...")
            try:
                websocket = await websockets.connect(self.url, **self.ws_options)
            except asyncio.TimeoutError:
                raise
            except (OSError, WebSocketException) as e:
                raise TransportError(f"WebSocket error: {e}", cause=e) from e

            payload = self.create_request_payload()
            self.debug_message(f'RPC request #{self.request_id}: "{self.method}"')

            try:
                await websocket.send(json.dumps(payload))

                while True:
                    response = self.process_message(await websocket.recv())
                    if response is not None:
                        settled = True
                        return response['result']

            except ConnectionClosed as e:
                raise self.closed_exception(e) from e

        finally:
            if websocket is not None:
                if settled:
                    self.debug_message(f"Closing websocket connection to {self.url}")
                    await websocket.close()
                else:
                    # No closing handshake: the peer may never answer it and the deadline has to hold
                    self.debug_message(f"Aborting websocket connection to {self.url}")
                    websocket.transport.abort()

    def process_message(self, message) -> Optional[dict]:
        """
        Parses one received frame. Returns the envelope when it is the response to this session's request, None
        when the frame belongs to something else

        Parameters
        ----------
        message: str or bytes as received from the websocket

        Returns
        -------
        dict or None
        """
        try:
            envelope = json.loads(message)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"Failed to parse metadata response: {e}", cause=e) from e

        if type(envelope) is not dict:
            raise MalformedResponse(f"Expected a JSON-RPC object, received {type(envelope).__name__}")

        # Errors without an id are emitted by the node when it cannot parse the request at all
        if 'error' in envelope and envelope.get('id') in (self.request_id, None):
            error = envelope['error']
            if type(error) is dict:
                raise ProtocolError(
                    f"RPC error: {error.get('message')}", code=error.get('code'), data=error.get('data')
                )
            raise ProtocolError(f"RPC error: {error}")

        if envelope.get('id') != self.request_id:
            self.debug_message(f"Ignoring websocket message not matching request #{self.request_id}")
            return None

        if 'result' not in envelope:
            raise MalformedResponse(f"Response to request #{self.request_id} contains neither result nor error")

        return envelope

    def closed_exception(self, exception: ConnectionClosed) -> Exception:
        if exception.rcvd is not None:
            code, reason = exception.rcvd.code, exception.rcvd.reason
        else:
            code, reason = ABNORMAL_CLOSURE_CODE, ''

        if code == NORMAL_CLOSURE_CODE:
            return TransportError(
                f"Connection to {self.url} closed before a response was received", cause=exception
            )

        return AbnormalClosure(
            f"Connection closed with code {code}: {reason}", code=code, reason=reason, cause=exception
        )


class WebsocketTransport:

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, ws_options: Optional[dict] = None):
        """
        Issues `state_getMetadata` requests, each on its own `RpcSession`

        Parameters
        ----------
        timeout: deadline in seconds per request
        ws_options: dict of options to pass to the websockets connect function
        """
        self.timeout = timeout
        self.request_id = 1

        self.ws_options = dict(ws_options or {})

        if 'max_size' not in self.ws_options:
            self.ws_options['max_size'] = 2 ** 32

        if 'close_timeout' not in self.ws_options:
            self.ws_options['close_timeout'] = DEFAULT_CLOSE_TIMEOUT

    def create_session(self, url: str) -> RpcSession:
        request_id = self.request_id
        self.request_id += 1

        return RpcSession(url, request_id, timeout=self.timeout, ws_options=self.ws_options)

    async def fetch_metadata(self, url: str) -> str:
        """
        Retrieves the raw hex-encoded runtime metadata of the node at given URL

        Parameters
        ----------
        url

        Returns
        -------
        str
        """
        return await self.create_session(url).request()
