"""Models for Cloud Function deployments."""
from .cloud_function import CloudFunction
from .delete_function_result import DeleteFailure, DeleteFunctionResult, DeleteSuccess
from .deploy_function_result import DeploymentFailure, DeploymentResult, DeploymentSuccess

__all__ = ['CloudFunction', 'DeploymentResult', 'DeploymentSuccess', 'DeploymentFailure',
           'DeleteFunctionResult', 'DeleteSuccess', 'DeleteFailure']
