from rest_framework import status
from rest_framework.exceptions import APIException


class BoostValidationError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid boost request.'
    default_code = 'invalid'


class SellerNotEligible(BoostValidationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'This account cannot submit seller boost requests.'
    default_code = 'seller_not_eligible'


class BoostConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A competing boost request is already pending or active.'
    default_code = 'conflict'

    def __init__(self, detail=None, conflicting_request_id=None, conflicting_status=None):
        self.conflicting_request_id = conflicting_request_id
        self.conflicting_status = conflicting_status
        payload = {'message': str(detail or self.default_detail)}
        if conflicting_request_id is not None:
            payload['conflicting_request_id'] = conflicting_request_id
            payload['conflicting_status'] = conflicting_status
        super().__init__(payload)
        if conflicting_request_id is not None:
            self.detail['conflicting_request_id'] = conflicting_request_id


class BoostNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Boost resource not found.'
    default_code = 'not_found'


class StateTransitionError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Illegal boost status transition.'
    default_code = 'invalid_transition'
