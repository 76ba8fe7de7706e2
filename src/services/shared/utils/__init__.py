from .auth import current_user_id as current_user_id
from .http_response import api_response as api_response
from .http_response import error_response as error_response
from .http_response import error_status as error_status
