from sqlalchemy.exc import OperationalError


def attach(app, db):
    @app.errorhandler(OperationalError)
    def _db_error(e):
        app.logger.error("[db] unavailable: %r", e)
        # reciclamos conexiones rotas (SSL EOF / bad mac)
        db.session.remove()
        db.engine.dispose()
        return "Database unavailable", 503
