from flask import jsonify, request

from models.errors import RosterError
from models.metrics import get_metrics
from models.utils import reference_instant

def register_data_routes(app, context):
    """Register the attendance data and metrics routes"""

    @app.route('/spreadsheet-data')
    def spreadsheet_data():
        try:
            tz_offset = int(request.args.get('tzo', 0))
        except ValueError:
            return jsonify({
                'error': 'Invalid tzo parameter',
                'details': 'tzo must be the timezone offset in whole minutes'
            }), 400

        try:
            records = context.data.get_attendance_view(reference_instant(tz_offset))
        except RosterError as e:
            print(f"[SHEETS] ❌ /spreadsheet-data failed: {e}")
            return jsonify({
                'error': 'Failed to load spreadsheet data',
                'details': str(e)
            }), 500

        return jsonify({'data': [record.to_dict() for record in records]})

    @app.route('/metrics')
    def metrics():
        return jsonify(get_metrics(cache_info=context.cache.info()))
