# Poppes Natural - development server
# Production deployments should serve poppes:create_app() with a WSGI server.

import os
from poppes import create_app

app = create_app(os.environ.get('FLASK_CONFIG'))

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
