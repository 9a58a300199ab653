import os

from wsgi import app

if __name__ == "__main__":
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    # No usar debug en producción; esto es sólo para dev local
    app.run(host=host, port=port, debug=False)
