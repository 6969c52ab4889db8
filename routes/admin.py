from urllib.parse import unquote

from flask import request

TEXT = {'Content-Type': 'text/plain; charset=utf-8'}

def _required_arg(name):
    value = request.args.get(name, '')
    return unquote(value) if value else ''

def register_admin_routes(app, context):
    """Register routes that change the sheet coordinates and the alias table"""

    @app.route('/person-mapping')
    def person_mapping():
        raw_name = _required_arg('from')
        canonical_name = _required_arg('to')
        if not raw_name or not canonical_name:
            return 'Both "from" and "to" query parameters are required', 400, TEXT

        context.data.add_person_mapping(raw_name, canonical_name)
        return f'Mapped "{raw_name}" to "{canonical_name}"', 200, TEXT

    @app.route('/set-spreadsheet-id')
    def set_spreadsheet_id():
        spreadsheet_id = _required_arg('id')
        if not spreadsheet_id:
            return 'Missing "id" query parameter', 400, TEXT

        context.data.set_spreadsheet_id(spreadsheet_id)
        return f'Spreadsheet id set to {spreadsheet_id}', 200, TEXT

    @app.route('/set-spreadsheet-range')
    def set_spreadsheet_range():
        sheet_range = _required_arg('range')
        if not sheet_range:
            return 'Missing "range" query parameter', 400, TEXT

        context.data.set_spreadsheet_range(sheet_range)
        return f'Spreadsheet range set to {sheet_range}', 200, TEXT
