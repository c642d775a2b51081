"""Provides application for development purposes."""

from loginserver.factory import create_web_app

app = create_web_app()

if __name__ == '__main__':
    app.run(host=app.config['LOGIN_HOST'], port=app.config['LOGIN_PORT'],
            threaded=True)
