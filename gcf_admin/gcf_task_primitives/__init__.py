from .delete_function_task import DeleteFunctionTask
from .deploy_function_task import DeployFunctionTask

__all__ = ['DeployFunctionTask', 'DeleteFunctionTask']
