"""Exam seating routes (JSON API)."""
from flask import Blueprint, current_app, jsonify, request, send_file

from utils.excel_parser import parse_halls_file
from utils.hall_registry import HallRegistry
from utils.pdf_generator import create_seating_pdf
from utils.roster import DatabaseRosterSource, DatabaseTeacherSource
from utils.seating_errors import DuplicateHallName, InvalidHallFile, SeatingError
from utils.seating_service import ExamSeatingRequest, generate_seating
from utils.seating_store import SeatingRecordStore

exam_seating_bp = Blueprint('exam_seating', __name__)


def get_roster_source():
    return current_app.extensions.get('roster_source') or DatabaseRosterSource()


def get_teacher_source():
    return current_app.extensions.get('teacher_source') or DatabaseTeacherSource()


def _requested_classes():
    values = request.args.getlist('classes')
    classes = []
    for v in values:
        for c in v.split(','):
            c = c.strip()
            if c and c not in classes:
                classes.append(c)
    return classes


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise SeatingError('Request body must be JSON')
    return data


@exam_seating_bp.errorhandler(SeatingError)
def handle_seating_error(e):
    return jsonify({'success': False, 'error': str(e), 'code': e.code}), e.status_code


@exam_seating_bp.route('/auto-fill/classes')
def auto_fill_classes():
    return jsonify({'success': True, 'classes': get_roster_source().list_classes()})


@exam_seating_bp.route('/auto-fill/teachers')
def auto_fill_teachers():
    return jsonify({'success': True, 'totalTeachers': get_teacher_source().available_teacher_count()})


@exam_seating_bp.route('/auto-fill/students')
def auto_fill_students():
    classes = _requested_classes()
    if not classes:
        return jsonify({'success': True, 'totalStudents': 0, 'studentsByClass': {}})
    roster = get_roster_source().fetch_class_roster(classes)
    counts = {c: len(students) for c, students in roster['studentsByClass'].items()}
    total = roster['totalStudents']
    return jsonify({
        'success': True,
        'totalStudents': total,
        'studentsByClass': counts,
        'message': f'Found {total} students in {len(classes)} class(es)',
    })


@exam_seating_bp.route('/halls/validate', methods=['POST'])
def validate_halls():
    """Register a list of halls and return them normalised (columns derived)."""
    data = _json_body()
    halls = data.get('examHalls', []) if isinstance(data, dict) else data
    if not isinstance(halls, list):
        raise SeatingError('examHalls must be a list of halls')
    registry = HallRegistry(halls)
    return jsonify({
        'success': True,
        'examHalls': registry.to_list(),
        'totalCapacity': registry.total_capacity,
    })


@exam_seating_bp.route('/halls/import', methods=['POST'])
def import_halls():
    file = request.files.get('file')
    if not file or file.filename == '':
        raise InvalidHallFile('Please select a file to upload.')
    records = parse_halls_file(
        file.read(),
        file.filename,
        default_capacity=current_app.config['DEFAULT_HALL_CAPACITY'],
        default_rows=current_app.config['DEFAULT_HALL_ROWS'],
    )
    registry = HallRegistry()
    skipped = []
    for r in records:
        try:
            registry.add(r)
        except DuplicateHallName as e:
            skipped.append(e.hall_name)
    current_app.logger.info('Imported %d halls from %s (%d duplicates skipped)',
                            len(registry), file.filename, len(skipped))
    return jsonify({
        'success': True,
        'examHalls': registry.to_list(),
        'totalCapacity': registry.total_capacity,
        'skippedDuplicates': skipped,
        'message': f'Imported {len(registry)} halls. Skipped {len(skipped)} duplicates.',
    })


@exam_seating_bp.route('/generate', methods=['POST'])
def generate():
    data = _json_body()
    if not isinstance(data, dict):
        raise SeatingError("Request body must be a JSON object")
    seating_request = ExamSeatingRequest.from_dict(
        data, default_min_distance=current_app.config['DEFAULT_MIN_DISTANCE']
    )
    record = generate_seating(
        seating_request,
        get_roster_source(),
        get_teacher_source(),
        store=SeatingRecordStore(),
        shuffle=current_app.extensions.get('seat_shuffle'),
    )
    return jsonify({'success': True, 'examSeating': record}), 201


@exam_seating_bp.route('/all')
def list_all():
    return jsonify({'success': True, 'examSeatings': SeatingRecordStore().list()})


@exam_seating_bp.route('/<record_id>')
def view(record_id):
    return jsonify({'success': True, 'examSeating': SeatingRecordStore().get(record_id)})


@exam_seating_bp.route('/<record_id>/pdf')
def download_pdf(record_id):
    record = SeatingRecordStore().get(record_id)
    pdf = create_seating_pdf(record)
    return send_file(
        pdf,
        mimetype='application/pdf',
        as_attachment=True,
        download_name=f"seating_{record['examName']}_{record['examDate']}.pdf",
    )


@exam_seating_bp.route('/<record_id>', methods=['DELETE'])
def delete(record_id):
    SeatingRecordStore().delete(record_id)
    current_app.logger.info('Exam seating %s deleted', record_id)
    return jsonify({'success': True, 'message': 'Exam seating arrangement deleted successfully'})
