def envelope(data, count=None):
    """
    Wraps successful payloads in the API's response envelope.

    Every successful response has the shape ``{"success": true, "data": ...}``. List endpoints also
    pass ``count`` so clients do not have to measure the list themselves.
    """
    body = {'success': True, 'data': data}
    if count is not None:
        body['count'] = count
    return body
