"""Canonical XML-RPC documents for testing."""

from __future__ import annotations

from xmlrpc.client import dumps

# ============================================================================
# Valid Calls
# ============================================================================

ECHO_CALL = dumps(("a", "b"), "echo").encode()

ADD_CALL = dumps((2, 3), "add").encode()

DOTTED_CALL = dumps(("x",), "Foo.Bar.baz").encode()

NO_PARAMS_CALL = b"""<?xml version="1.0"?>
<methodCall>
  <methodName>ping</methodName>
</methodCall>
"""

UNTYPED_VALUE_CALL = b"""<?xml version="1.0"?>
<methodCall>
  <methodName>echo</methodName>
  <params><param><value>plain</value></param></params>
</methodCall>
"""

# ============================================================================
# Malformed Requests
# ============================================================================

TRUNCATED_CALL = ECHO_CALL[: len(ECHO_CALL) // 2]

MISSING_METHOD_NAME = b"""<?xml version="1.0"?>
<methodCall>
  <params><param><value><string>a</string></value></param></params>
</methodCall>
"""

EMPTY_METHOD_NAME = b"""<?xml version="1.0"?>
<methodCall>
  <methodName></methodName>
</methodCall>
"""

ONLY_DOTS_METHOD_NAME = dumps((), "...").encode()

BAD_INT_VALUE = b"""<?xml version="1.0"?>
<methodCall>
  <methodName>add</methodName>
  <params><param><value><int>three</int></value></param></params>
</methodCall>
"""

UNKNOWN_VALUE_TAG = b"""<?xml version="1.0"?>
<methodCall>
  <methodName>add</methodName>
  <params><param><value><decimal>1</decimal></value></param></params>
</methodCall>
"""

METHOD_RESPONSE = dumps(("result",), methodresponse=True).encode()

NOT_XML = b"this is not xml"

MALFORMED_BODIES = [
    b"",
    NOT_XML,
    TRUNCATED_CALL,
    MISSING_METHOD_NAME,
    EMPTY_METHOD_NAME,
    ONLY_DOTS_METHOD_NAME,
    BAD_INT_VALUE,
    UNKNOWN_VALUE_TAG,
    METHOD_RESPONSE,
]
