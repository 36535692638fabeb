from flask import Blueprint, request, jsonify, current_app
import logging

from services import conversation_service, message_service, summary_service, transcription_service
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


def get_language_service():
    return current_app.extensions['language_service']


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


@api_bp.route('/conversations', methods=['GET'])
def list_conversations():
    """Get all conversations, newest first, with a preview of the latest message"""
    conversations = conversation_service.list_conversations()
    return jsonify({
        'status': 'success',
        'conversations': [c.to_dict() for c in conversations]
    })


@api_bp.route('/conversations', methods=['POST'])
def create_conversation():
    """Create a new consultation"""
    data = _json_body()
    conversation = conversation_service.create_conversation(data.get('title'))
    return jsonify({
        'status': 'success',
        'conversation': conversation.to_dict()
    }), 201


@api_bp.route('/conversations/<conversation_id>', methods=['GET'])
def get_conversation_by_id(conversation_id):
    """Get a specific conversation with all of its messages"""
    conversation = conversation_service.get_conversation(conversation_id)
    return jsonify({
        'status': 'success',
        'conversation': conversation.to_dict()
    })


@api_bp.route('/conversations/<conversation_id>', methods=['PATCH'])
def rename_conversation_by_id(conversation_id):
    data = _json_body()
    conversation = conversation_service.rename_conversation(conversation_id, data.get('title'))
    return jsonify({
        'status': 'success',
        'conversation': conversation.to_dict()
    })


@api_bp.route('/conversations/<conversation_id>', methods=['DELETE'])
def delete_conversation_by_id(conversation_id):
    """Delete a conversation and its messages"""
    conversation_service.delete_conversation(conversation_id)
    return jsonify({
        'status': 'success',
        'message': f'Conversation {conversation_id} deleted successfully'
    })


@api_bp.route('/messages', methods=['POST'])
def create_message():
    """
    Store a message, translating it when original_lang differs from target_lang.

    Expects JSON: conversation_id, role, text, original_lang, target_lang and
    optionally audio_url.
    """
    data = _json_body()
    message = message_service.create_message(
        get_language_service(),
        conversation_id=data.get('conversation_id'),
        role=data.get('role'),
        text=data.get('text'),
        original_lang=data.get('original_lang'),
        target_lang=data.get('target_lang'),
        audio_url=data.get('audio_url')
    )
    return jsonify({
        'status': 'success',
        'message': message.to_dict()
    }), 201


@api_bp.route('/messages', methods=['GET'])
def list_messages():
    """Get messages for a conversation, optionally filtered by ?search="""
    messages = message_service.list_messages(
        request.args.get('conversation_id'),
        request.args.get('search')
    )
    return jsonify({
        'status': 'success',
        'messages': [m.to_dict() for m in messages]
    })


@api_bp.route('/summary', methods=['POST'])
def generate_summary():
    """Generate and store a clinical summary for a conversation"""
    data = _json_body()
    result = summary_service.generate_summary(get_language_service(), data.get('conversation_id'))
    response = {'status': 'success'}
    response.update(result.to_dict())
    return jsonify(response)


@api_bp.route('/transcribe', methods=['POST'])
def transcribe():
    """Transcribe an uploaded audio clip (multipart field 'audio')"""
    if 'audio' not in request.files:
        raise ValidationError('No audio file provided')

    audio_file = request.files['audio']
    audio_bytes = audio_file.read()
    text = transcription_service.transcribe_audio(
        get_language_service(), audio_bytes, filename=audio_file.filename or None
    )
    return jsonify({
        'status': 'success',
        'text': text
    })
