def handler(event, context=None):
    payload = (event or {}).get("input")
    return {"status": True, "message": "ok", "input": payload}
