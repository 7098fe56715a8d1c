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
import base64
import hashlib
import json
import unittest
from unittest.mock import MagicMock, AsyncMock, patch

from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK, InvalidURI
from websockets.frames import Close

from substratedocs.exceptions import ConnectionTimeout, TransportError, AbnormalClosure, ProtocolError, \
    MalformedResponse
from substratedocs.transport import RpcSession, WebsocketTransport
from test import settings

WEBSOCKET_GUID = '258EAFA5-E914-47DA-95CA-C5AB0DC85B11'


def create_websocket(messages):
    websocket = MagicMock()
    websocket.send = AsyncMock()
    websocket.recv = AsyncMock(side_effect=messages)
    websocket.close = AsyncMock()
    return websocket


async def hang(*args, **kwargs):
    await asyncio.sleep(10)


class RpcSessionTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.session = RpcSession(settings.POLKADOT_NODE_URL, request_id=7, timeout=0.2)

    def assert_aborted(self, websocket):
        websocket.transport.abort.assert_called_once()
        websocket.close.assert_not_awaited()

    async def request(self, websocket):
        with patch('substratedocs.transport.websockets.connect', new=AsyncMock(return_value=websocket)) as connect:
            try:
                return await self.session.request()
            finally:
                self.connect = connect

    async def test_result_returned(self):
        websocket = create_websocket([json.dumps({'jsonrpc': '2.0', 'result': '0x6d657461', 'id': 7})])

        result = await self.request(websocket)

        self.assertEqual('0x6d657461', result)
        self.connect.assert_awaited_once_with(settings.POLKADOT_NODE_URL)
        websocket.close.assert_awaited_once()

    async def test_request_payload(self):
        websocket = create_websocket([json.dumps({'jsonrpc': '2.0', 'result': '0x00', 'id': 7})])

        await self.request(websocket)

        payload = json.loads(websocket.send.call_args[0][0])
        self.assertDictEqual(
            {'jsonrpc': '2.0', 'method': 'state_getMetadata', 'params': [], 'id': 7}, payload
        )

    async def test_unmatched_messages_ignored(self):
        websocket = create_websocket([
            json.dumps({'jsonrpc': '2.0', 'result': '0xffff', 'id': 6}),
            json.dumps({'jsonrpc': '2.0', 'method': 'chain_newHead', 'params': {'subscription': 'abc'}}),
            json.dumps({'jsonrpc': '2.0', 'result': '0x00', 'id': 7})
        ])

        self.assertEqual('0x00', await self.request(websocket))
        self.assertEqual(3, websocket.recv.await_count)
        websocket.close.assert_awaited_once()

    async def test_response_timeout(self):
        websocket = create_websocket(hang)

        with self.assertRaises(ConnectionTimeout) as cm:
            await self.request(websocket)

        self.assertIn(settings.POLKADOT_NODE_URL, str(cm.exception))
        self.assert_aborted(websocket)

    async def test_connect_timeout(self):
        with patch('substratedocs.transport.websockets.connect', new=AsyncMock(side_effect=hang)):
            with self.assertRaises(ConnectionTimeout):
                await self.session.request()

    async def test_connection_refused(self):
        error = ConnectionRefusedError(111, 'Connection refused')

        with patch('substratedocs.transport.websockets.connect', new=AsyncMock(side_effect=error)):
            with self.assertRaises(TransportError) as cm:
                await self.session.request()

        self.assertIs(error, cm.exception.cause)
        self.assertIs(error, cm.exception.__cause__)

    async def test_invalid_uri(self):
        error = InvalidURI('foo://bar', 'scheme isn\'t ws or wss')

        with patch('substratedocs.transport.websockets.connect', new=AsyncMock(side_effect=error)):
            with self.assertRaises(TransportError):
                await self.session.request()

    async def test_abnormal_closure(self):
        websocket = create_websocket(ConnectionClosedError(Close(1011, 'internal error'), None))

        with self.assertRaises(AbnormalClosure) as cm:
            await self.request(websocket)

        self.assertEqual(1011, cm.exception.code)
        self.assertEqual('internal error', cm.exception.reason)
        self.assert_aborted(websocket)

    async def test_closure_without_close_frame(self):
        websocket = create_websocket(ConnectionClosedError(None, None))

        with self.assertRaises(AbnormalClosure) as cm:
            await self.request(websocket)

        self.assertEqual(1006, cm.exception.code)

    async def test_normal_closure_before_response(self):
        websocket = create_websocket(ConnectionClosedOK(Close(1000, ''), Close(1000, ''), rcvd_then_sent=True))

        with self.assertRaises(TransportError) as cm:
            await self.request(websocket)

        self.assertNotIsInstance(cm.exception, AbnormalClosure)
        self.assert_aborted(websocket)

    async def test_rpc_error(self):
        websocket = create_websocket([json.dumps({
            'jsonrpc': '2.0', 'error': {'code': -32601, 'message': 'Method not found'}, 'id': 7
        })])

        with self.assertRaises(ProtocolError) as cm:
            await self.request(websocket)

        self.assertEqual('RPC error: Method not found', cm.exception.message)
        self.assertEqual(-32601, cm.exception.code)
        self.assert_aborted(websocket)

    async def test_rpc_error_without_id(self):
        websocket = create_websocket([json.dumps({
            'jsonrpc': '2.0', 'error': {'code': -32700, 'message': 'Parse error'}, 'id': None
        })])

        with self.assertRaises(ProtocolError):
            await self.request(websocket)

    async def test_invalid_json(self):
        websocket = create_websocket(['<html>Bad gateway</html>'])

        with self.assertRaises(MalformedResponse):
            await self.request(websocket)

        self.assert_aborted(websocket)

    async def test_non_object_envelope(self):
        websocket = create_websocket([json.dumps(['0x00'])])

        with self.assertRaises(MalformedResponse):
            await self.request(websocket)

    async def test_missing_result(self):
        websocket = create_websocket([json.dumps({'jsonrpc': '2.0', 'id': 7})])

        with self.assertRaises(MalformedResponse):
            await self.request(websocket)

    async def test_session_single_use(self):
        websocket = create_websocket([json.dumps({'jsonrpc': '2.0', 'result': '0x00', 'id': 7})])
        await self.request(websocket)

        with self.assertRaises(RuntimeError):
            await self.session.request()


class WebsocketTransportTestCase(unittest.IsolatedAsyncioTestCase):

    def test_request_ids_increase(self):
        transport = WebsocketTransport(timeout=5)

        first = transport.create_session(settings.POLKADOT_NODE_URL)
        second = transport.create_session(settings.POLKADOT_NODE_URL)

        self.assertEqual(1, first.request_id)
        self.assertEqual(2, second.request_id)
        self.assertEqual(5, second.timeout)

    def test_default_ws_options(self):
        transport = WebsocketTransport(ws_options={'open_timeout': 3})

        self.assertEqual(2 ** 32, transport.ws_options['max_size'])
        self.assertEqual(1, transport.ws_options['close_timeout'])
        self.assertEqual(3, transport.ws_options['open_timeout'])

    async def test_fetch_metadata(self):
        transport = WebsocketTransport(timeout=1, ws_options={'max_size': 1024})
        websocket = create_websocket([json.dumps({'jsonrpc': '2.0', 'result': '0x6d657461', 'id': 1})])

        with patch('substratedocs.transport.websockets.connect', new=AsyncMock(return_value=websocket)) as connect:
            result = await transport.fetch_metadata(settings.KUSAMA_NODE_URL)

        self.assertEqual('0x6d657461', result)
        connect.assert_awaited_once_with(settings.KUSAMA_NODE_URL, max_size=1024, close_timeout=1)
        websocket.close.assert_awaited_once()


class SilentNodeTestCase(unittest.IsolatedAsyncioTestCase):
    """
    Node that accepts the websocket handshake and then never sends a frame, not even a close frame
    """

    async def asyncSetUp(self):
        self.server = await asyncio.start_server(self.handle_connection, '127.0.0.1', 0)
        port = self.server.sockets[0].getsockname()[1]
        self.url = f'ws://127.0.0.1:{port}'

    async def asyncTearDown(self):
        self.server.close()
        await self.server.wait_closed()

    @staticmethod
    async def handle_connection(reader, writer):
        request = await reader.readuntil(b'\r\n\r\n')

        headers = {}
        for line in request.decode().split('\r\n')[1:]:
            if ':' in line:
                name, value = line.split(':', 1)
                headers[name.strip().lower()] = value.strip()

        accept = base64.b64encode(
            hashlib.sha1((headers['sec-websocket-key'] + WEBSOCKET_GUID).encode()).digest()
        ).decode()

        writer.write(
            'HTTP/1.1 101 Switching Protocols\r\n'
            'Upgrade: websocket\r\n'
            'Connection: Upgrade\r\n'
            f'Sec-WebSocket-Accept: {accept}\r\n\r\n'.encode()
        )
        await writer.drain()

        try:
            while await reader.read(1024):
                pass
        except ConnectionError:
            pass
        finally:
            writer.close()

    async def test_timeout_settles_within_deadline(self):
        loop = asyncio.get_running_loop()
        session = RpcSession(self.url, request_id=1, timeout=0.5)

        started = loop.time()

        with self.assertRaises(ConnectionTimeout):
            await session.request()

        self.assertLess(loop.time() - started, 1.5)

    async def test_transport_timeout_settles_within_deadline(self):
        loop = asyncio.get_running_loop()
        transport = WebsocketTransport(timeout=0.5)

        started = loop.time()

        with self.assertRaises(ConnectionTimeout):
            await transport.fetch_metadata(self.url)

        self.assertLess(loop.time() - started, 1.5)


if __name__ == '__main__':
    unittest.main()
