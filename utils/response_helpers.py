from fastapi.responses import JSONResponse

def error_response(message: str, status_code: int = 500, headers: dict | None = None):
    return JSONResponse(
        content={"success": False, "data": None, "error": message},
        status_code=status_code,
        headers=headers,
    )
