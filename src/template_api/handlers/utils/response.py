"""
API Gateway proxy responses.

Every handler answers with the same envelope: a status code, a JSON body and
the fixed CORS header set.
"""

from http import HTTPStatus
from typing import Any, Dict, Union

CORS_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Authorization, content-type',
    'Access-Control-Allow-Methods': '*',
}


def lambda_response(status_code: Union[HTTPStatus, int], body: str = '') -> Dict[str, Any]:
    """
    Create an API Gateway proxy response.

    Args:
        status_code: HTTP status code
        body: JSON encoded response body

    Returns:
        Response dictionary with statusCode, body and headers
    """
    return {
        'statusCode': int(status_code),
        'body': body,
        'headers': {
            'content-type': 'application/json',
            **CORS_HEADERS,
        },
    }
