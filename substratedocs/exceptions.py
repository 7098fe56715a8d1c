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


class SubstrateDocsException(Exception):

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(SubstrateDocsException):
    pass


class ConnectionTimeout(SubstrateDocsException):
    pass


class TransportError(SubstrateDocsException):
    pass


class AbnormalClosure(SubstrateDocsException):

    def __init__(self, message, code=None, reason=None, cause=None):
        super().__init__(message, cause=cause)
        self.code = code
        self.reason = reason


class ProtocolError(SubstrateDocsException):
    """
    The node answered with a JSON-RPC error object
    """

    def __init__(self, message, code=None, data=None):
        super().__init__(message)
        self.code = code
        self.data = data


class MalformedResponse(SubstrateDocsException):
    pass


class DecodeError(SubstrateDocsException):

    def __init__(self, message, payload_length=None, cause=None):
        super().__init__(message, cause=cause)
        self.payload_length = payload_length
