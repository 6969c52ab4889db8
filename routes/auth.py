from flask import request, redirect

from models.errors import UpstreamError

TEXT = {'Content-Type': 'text/plain; charset=utf-8'}

def register_auth_routes(app, context):
    """Register the Google OAuth login routes"""

    @app.route('/')
    def index():
        status = 'Logged in.' if context.tokens.is_authenticated else 'Not logged in.'
        return f'<p>{status}</p><a href="/auth"><button>Log in</button></a>'

    @app.route('/auth')
    def auth():
        return redirect(context.tokens.authorization_url(state=request.args.get('state')))

    @app.route('/google-auth-done')
    def google_auth_done():
        error = request.args.get('error')
        if error:
            return f'Authorization denied: {error}', 400, TEXT

        code = request.args.get('code')
        if not code:
            return 'Missing authorization code', 400, TEXT

        try:
            context.tokens.complete_authorization(code)
        except UpstreamError as e:
            return f'Authentication failed: {e.message}', 500, TEXT

        # Old snapshot may have been read with another account
        context.cache.clear()
        return 'Authentication successful!', 200, TEXT
