"""
WSGI Entry Point for Production Deployment
"""
import os

from provenance import create_app

# Create application instance
app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port)
