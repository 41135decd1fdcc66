import sys
import os

# --- Make the inputcheck package importable from source and from the exe ---
if getattr(sys, 'frozen', False):
    # Frozen exe: the executable directory is the root
    BASE_DIR = os.path.dirname(sys.executable)
    sys.path.insert(0, BASE_DIR)
    # Bundled files live under _MEIPASS
    if hasattr(sys, '_MEIPASS'):
        sys.path.insert(0, sys._MEIPASS)
else:
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    sys.path.insert(0, BASE_DIR)
# ---------------------------------------------------------------------------

from inputcheck.app import create_app, open_browser
import threading

if __name__ == '__main__':
    app = create_app()

    # Open the browser after a short delay
    threading.Timer(1.5, open_browser).start()

    # debug=False and use_reloader=False so only one window opens
    app.run(
        debug=False,
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 8080)),
        use_reloader=False,
        threaded=True
    )
