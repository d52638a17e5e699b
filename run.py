import os

from gymcloud import create_app

app = create_app(os.getenv("FLASK_CONFIG", "default"))

if __name__ == '__main__':
    app.run(debug=app.config.get("DEBUG", False), port=int(os.getenv("PORT", 5000)))
