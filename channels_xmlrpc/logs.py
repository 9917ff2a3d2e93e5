EMPTY_CALL: str = "Received empty XML-RPC request body."
INVALID_REQUEST: str = 'Invalid XML-RPC request "%s"'
CALL_INTERCEPTED: str = "Received XML-RPC call: %s"
CALL_INTERCEPTED_WITH_ARGS: str = "Received XML-RPC call: %s with args %s"
METHOD_NOT_FOUND: str = 'Couldn\'t find xmlrpc method "%s"'
METHOD_NOT_REMOTE: str = 'Method "%s" has no Remote attribute'
RPC_METHOD_CALL_START: str = "Calling %s"
RPC_METHOD_CALL_END: str = "%s processed with result: %s."
RPC_METHOD_FAULT: str = "%s raised fault %s: %s"
RPC_METHOD_ERROR: str = "Error while executing %s: %s"
ENCODE_ERROR: str = "Cannot encode %s result: %s"

# flakes8: noqa: E501
