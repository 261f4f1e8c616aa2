"""
Tests for the facade table: argument binding, request building and
result presentation. No network involved.
"""

import pytest

from databricks_mcp.client import HttpMethod
from databricks_mcp.credentials import TenantCredentials
from databricks_mcp.domains.clusters import cluster_spec
from databricks_mcp.domains.jobs import job_settings
from databricks_mcp.domains.mlflow import model_name_filter
from databricks_mcp.domains.sql import statement_result
from databricks_mcp.endpoints import (
    DEFAULT_ENDPOINTS,
    Param,
    ParamLocation,
    ParamType,
    RestEndpoint,
    page,
    tool_catalog,
    unwrap,
    unwrap_list,
)
from databricks_mcp.errors import ContractViolation
from databricks_mcp.schemas import JobsPage

ENDPOINTS = {endpoint.name: endpoint for endpoint in DEFAULT_ENDPOINTS}


def bind_and_build(name, arguments, credentials=None):
    endpoint = ENDPOINTS[name]
    values = endpoint.bind_arguments(arguments, credentials)
    return values, endpoint.build_request(values)


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------


class TestCatalog:
    def test_tool_count(self):
        assert len(DEFAULT_ENDPOINTS) == 113

    def test_tool_names_unique(self):
        names = [endpoint.name for endpoint in DEFAULT_ENDPOINTS]
        assert len(names) == len(set(names))

    def test_all_names_prefixed(self):
        assert all(endpoint.name.startswith("databricks_") for endpoint in DEFAULT_ENDPOINTS)

    def test_categories(self):
        catalog = tool_catalog()
        assert list(catalog) == [
            "sql",
            "jobs",
            "clusters",
            "workspace",
            "dbfs",
            "unity_catalog",
            "mlflow",
            "secrets",
            "repos",
            "pipelines",
            "instance_pools",
            "tokens",
            "connection",
        ]
        assert catalog["connection"] == ["databricks_test_connection"]
        assert sum(len(names) for names in catalog.values()) == 113

    def test_catalog_of_custom_list(self):
        endpoint = RestEndpoint(name="t", path="/x", method=HttpMethod.GET, description="d")
        assert tool_catalog([endpoint]) == {"general": ["t"]}

    @pytest.mark.parametrize("endpoint", DEFAULT_ENDPOINTS, ids=lambda e: e.name)
    def test_path_placeholders_are_declared(self, endpoint):
        path_params = {p.name for p in endpoint.params if p.location is ParamLocation.PATH}
        for name in path_params:
            assert f"{{{name}}}" in endpoint.path

    @pytest.mark.parametrize("endpoint", DEFAULT_ENDPOINTS, ids=lambda e: e.name)
    def test_every_tool_converts(self, endpoint):
        tool = endpoint.to_mcp_tool()
        assert tool.name == endpoint.name
        assert tool.description
        assert set(tool.inputSchema.required) <= set(tool.inputSchema.properties)


# -----------------------------------------------------------------------------
# Param
# -----------------------------------------------------------------------------


class TestParam:
    def test_wire_name_defaults_to_snake_case(self):
        assert Param("warehouseId", "d").wire == "warehouse_id"
        assert Param("path", "d").wire == "path"

    def test_explicit_wire_name(self):
        assert Param("value", "d", wire_name="string_value").wire == "string_value"

    @pytest.mark.parametrize(
        ("param_type", "value"),
        [
            (ParamType.STRING, 1),
            (ParamType.INTEGER, "5"),
            (ParamType.INTEGER, True),
            (ParamType.INTEGER, 1.5),
            (ParamType.NUMBER, "1.0"),
            (ParamType.BOOLEAN, "true"),
            (ParamType.ARRAY, "a,b"),
        ],
    )
    def test_type_mismatch(self, param_type, value):
        _, error = Param("x", "d", type=param_type).coerce(value)
        assert error is not None
        assert "'x'" in error

    def test_integral_float_accepted_as_integer(self):
        value, error = Param("x", "d", type=ParamType.INTEGER).coerce(3.0)
        assert error is None
        assert value == 3
        assert isinstance(value, int)

    def test_json_string_decoded(self):
        value, error = Param("x", "d", type=ParamType.JSON).coerce('[{"task_key": "a"}]')
        assert error is None
        assert value == [{"task_key": "a"}]

    def test_json_already_decoded_passes(self):
        value, error = Param("x", "d", type=ParamType.JSON).coerce({"a": 1})
        assert error is None
        assert value == {"a": 1}

    def test_invalid_json(self):
        _, error = Param("x", "d", type=ParamType.JSON).coerce("{bad")
        assert "not valid JSON" in error

    def test_spread_requires_object(self):
        _, error = Param("x", "d", type=ParamType.JSON, spread=True).coerce("[1, 2]")
        assert "JSON object" in error

    def test_enum(self):
        param = Param("x", "d", enum=("A", "B"))
        assert param.coerce("A")[1] is None
        assert "one of: A, B" in param.coerce("C")[1]

    def test_bounds(self):
        param = Param("x", "d", type=ParamType.INTEGER, minimum=1, maximum=10)
        assert param.coerce(5)[1] is None
        assert ">= 1" in param.coerce(0)[1]
        assert "<= 10" in param.coerce(11)[1]

    def test_empty_path_value_rejected(self):
        _, error = Param("x", "d", location=ParamLocation.PATH).coerce("  ")
        assert "cannot be empty" in error

    def test_schema(self):
        schema = Param(
            "format",
            "Result format",
            required=False,
            default="JSON_ARRAY",
            enum=("JSON_ARRAY", "CSV"),
        ).to_schema()
        assert schema == {
            "type": "string",
            "description": "Result format",
            "enum": ["JSON_ARRAY", "CSV"],
            "default": "JSON_ARRAY",
        }

    def test_json_param_schema_is_string(self):
        schema = Param("tasks", "Tasks", type=ParamType.JSON).to_schema()
        assert schema["type"] == "string"
        assert "JSON string" in schema["description"]

    def test_array_schema_has_items(self):
        schema = Param("ids", "Ids", type=ParamType.ARRAY).to_schema()
        assert schema["items"] == {"type": "string"}


# -----------------------------------------------------------------------------
# Argument Binding
# -----------------------------------------------------------------------------


class TestBinding:
    def test_unknown_argument_rejected(self):
        errors = ENDPOINTS["databricks_get_cluster"].validate_arguments(
            {"clusterId": "c1", "bogus": 1}
        )
        assert any("Unknown argument 'bogus'" in e for e in errors)

    def test_missing_required(self):
        errors = ENDPOINTS["databricks_get_cluster"].validate_arguments({})
        assert errors == ["Missing required parameter: 'clusterId'"]

    def test_none_counts_as_missing(self):
        errors = ENDPOINTS["databricks_get_cluster"].validate_arguments({"clusterId": None})
        assert errors == ["Missing required parameter: 'clusterId'"]

    def test_errors_collected_together(self):
        with pytest.raises(ContractViolation) as exc_info:
            ENDPOINTS["databricks_list_jobs"].bind_arguments(
                {"limit": "ten", "offset": -1, "extra": True}
            )

        violation = exc_info.value
        assert violation.tool_name == "databricks_list_jobs"
        assert len(violation.errors) == 3
        assert "Invalid arguments for tool 'databricks_list_jobs'" in violation.message

    def test_defaults_applied(self):
        values = ENDPOINTS["databricks_list_jobs"].bind_arguments({})
        assert values["limit"] == 20
        assert values["offset"] is None

    def test_default_factory_applied(self):
        values = ENDPOINTS["databricks_create_run"].bind_arguments({"experimentId": "1"})
        assert isinstance(values["startTime"], int)
        assert values["startTime"] > 0

    def test_warehouse_falls_back_to_credentials(self):
        credentials = TenantCredentials(host="https://h", token="t", warehouse_id="wh-9")
        _, request = bind_and_build(
            "databricks_execute_sql",
            {"statement": "SELECT 1"},
            credentials,
        )
        assert request.body["warehouse_id"] == "wh-9"

    def test_explicit_warehouse_wins(self):
        credentials = TenantCredentials(host="https://h", token="t", warehouse_id="wh-9")
        _, request = bind_and_build(
            "databricks_execute_sql",
            {"statement": "SELECT 1", "warehouseId": "wh-1"},
            credentials,
        )
        assert request.body["warehouse_id"] == "wh-1"

    def test_missing_warehouse_without_header(self):
        errors = ENDPOINTS["databricks_execute_sql"].validate_arguments(
            {"statement": "SELECT 1"},
            TenantCredentials(host="https://h", token="t"),
        )
        assert errors == ["Missing required parameter: 'warehouseId'"]


# -----------------------------------------------------------------------------
# Request Building
# -----------------------------------------------------------------------------


class TestBuildRequest:
    def test_execute_sql_defaults(self):
        _, request = bind_and_build(
            "databricks_execute_sql",
            {"statement": "SELECT 1", "warehouseId": "wh-1"},
        )

        assert request.method is HttpMethod.POST
        assert request.path == "/api/2.0/sql/statements"
        assert request.body == {
            "warehouse_id": "wh-1",
            "statement": "SELECT 1",
            "catalog": None,
            "schema": None,
            "wait_timeout": "50s",
            "disposition": "INLINE",
            "format": "JSON_ARRAY",
        }

    def test_path_params_are_quoted(self):
        _, request = bind_and_build(
            "databricks_get_table",
            {"fullName": "main.default.my table/x"},
        )
        assert request.path == "/api/2.1/unity-catalog/tables/main.default.my%20table%2Fx"

    def test_integer_path_param(self):
        _, request = bind_and_build(
            "databricks_get_sql_result_chunk",
            {"statementId": "s-1", "chunkIndex": 2},
        )
        assert request.path == "/api/2.0/sql/statements/s-1/result/chunks/2"

    def test_query_params_use_wire_names(self):
        _, request = bind_and_build("databricks_list_runs", {"jobId": 7, "activeOnly": True})

        assert request.body is None
        assert request.params == {
            "job_id": 7,
            "active_only": True,
            "completed_only": None,
            "limit": 20,
            "offset": None,
        }

    def test_transform_applied(self):
        _, request = bind_and_build("databricks_list_model_versions", {"name": "churn"})
        assert request.params == {"filter": "name='churn'"}

    def test_spread_merges_into_body(self):
        _, request = bind_and_build(
            "databricks_run_job",
            {"jobId": 3, "parameters": '{"notebook_params": {"date": "2024-01-01"}}'},
        )
        assert request.body == {"job_id": 3, "notebook_params": {"date": "2024-01-01"}}

    def test_spread_absent(self):
        _, request = bind_and_build("databricks_run_job", {"jobId": 3})
        assert request.body == {"job_id": 3}

    def test_json_param_under_wire_name(self):
        _, request = bind_and_build(
            "databricks_update_job",
            {"jobId": 3, "settings": '{"max_concurrent_runs": 2}'},
        )
        assert request.body == {"job_id": 3, "new_settings": {"max_concurrent_runs": 2}}

    def test_no_params_means_no_body(self):
        _, request = bind_and_build("databricks_list_clusters", {})
        assert request.body is None
        assert request.params is None

    def test_build_body_hook(self):
        _, request = bind_and_build(
            "databricks_create_cluster",
            {
                "clusterName": "etl",
                "sparkVersion": "13.3.x-scala2.12",
                "nodeTypeId": "i3.xlarge",
                "minWorkers": 1,
                "maxWorkers": 4,
            },
        )
        assert request.body == {
            "cluster_name": "etl",
            "spark_version": "13.3.x-scala2.12",
            "node_type_id": "i3.xlarge",
            "autoscale": {"min_workers": 1, "max_workers": 4},
        }


class TestBodyBuilders:
    def test_cluster_spec_fixed_size(self):
        spec = cluster_spec(
            {
                "clusterName": "c",
                "sparkVersion": "v",
                "nodeTypeId": "n",
                "numWorkers": 2,
                "autoterminationMinutes": 30,
            }
        )
        assert spec["num_workers"] == 2
        assert spec["autotermination_minutes"] == 30
        assert "autoscale" not in spec

    def test_cluster_spec_single_node_default(self):
        spec = cluster_spec({"clusterName": "c", "sparkVersion": "v", "nodeTypeId": "n"})
        assert spec["num_workers"] == 0

    def test_cluster_spec_needs_both_bounds_for_autoscale(self):
        spec = cluster_spec(
            {"clusterName": "c", "sparkVersion": "v", "nodeTypeId": "n", "minWorkers": 1}
        )
        assert "autoscale" not in spec
        assert spec["num_workers"] == 0

    def test_job_settings_with_schedule(self):
        settings = job_settings({"name": "nightly", "tasks": [], "schedule": "0 0 2 * * ?"})
        assert settings["schedule"] == {
            "quartz_cron_expression": "0 0 2 * * ?",
            "timezone_id": "UTC",
        }

    def test_job_settings_custom_timezone(self):
        settings = job_settings(
            {"name": "n", "tasks": [], "schedule": "0 0 2 * * ?", "timezone": "Europe/Berlin"}
        )
        assert settings["schedule"]["timezone_id"] == "Europe/Berlin"

    def test_job_settings_without_schedule(self):
        assert job_settings({"name": "n", "tasks": [{"task_key": "a"}]}) == {
            "name": "n",
            "tasks": [{"task_key": "a"}],
        }

    def test_model_name_filter(self):
        assert model_name_filter("churn") == "name='churn'"


# -----------------------------------------------------------------------------
# Reshaping & Presentation
# -----------------------------------------------------------------------------


class TestReshapers:
    def test_unwrap_list(self):
        assert unwrap_list("clusters")({"clusters": [{"id": 1}]}) == [{"id": 1}]
        assert unwrap_list("clusters")({}) == []
        assert unwrap_list("clusters")(None) == []

    def test_unwrap(self):
        assert unwrap("experiment")({"experiment": {"id": "1"}}) == {"id": "1"}
        assert unwrap("experiment")(None) is None

    def test_page_defaults_lists(self):
        assert page(JobsPage)(None) == {"jobs": [], "has_more": False}

    def test_page_keeps_unknown_fields(self):
        shaped = page(JobsPage)({"jobs": [{"job_id": 1}], "has_more": True, "next_page_token": "t"})
        assert shaped == {"jobs": [{"job_id": 1}], "has_more": True, "next_page_token": "t"}

    def test_page_reads_null_fields_as_absent(self):
        shaped = page(JobsPage)({"jobs": None, "has_more": None})
        assert shaped == {"jobs": [], "has_more": False}

    def test_page_drops_null_unknown_fields(self):
        shaped = page(JobsPage)({"jobs": [], "has_more": False, "extra": None})
        assert shaped == {"jobs": [], "has_more": False}

    def test_statement_pending_adds_hint(self):
        shaped = statement_result({"statement_id": "s", "status": {"state": "RUNNING"}})
        assert "databricks_get_sql_status" in shaped["hint"]

    def test_statement_finished_has_no_hint(self):
        shaped = statement_result(
            {
                "statement_id": "s",
                "status": {"state": "SUCCEEDED"},
                "result": {"data_array": [["1"]]},
            }
        )
        assert "hint" not in shaped
        assert shaped["result"] == {"data_array": [["1"]]}


class TestPresent:
    def test_list_key_with_count_and_echo(self):
        endpoint = ENDPOINTS["databricks_list_secret_acls"]
        presented = endpoint.present({"scope": "prod"}, [{"principal": "users"}])
        assert presented == {"acls": [{"principal": "users"}], "count": 1, "scope": "prod"}

    def test_list_key_empty(self):
        presented = ENDPOINTS["databricks_list_clusters"].present({}, [])
        assert presented == {"clusters": [], "count": 0}

    def test_count_key(self):
        presented = ENDPOINTS["databricks_list_jobs"].present(
            {}, {"jobs": [{"job_id": 1}, {"job_id": 2}], "has_more": False}
        )
        assert presented["count"] == 2
        assert presented["has_more"] is False

    def test_success_message(self):
        presented = ENDPOINTS["databricks_start_cluster"].present({"clusterId": "c1"}, None)
        assert presented == {"success": True, "message": "Cluster c1 is starting"}

    def test_success_message_keeps_data(self):
        presented = ENDPOINTS["databricks_run_job"].present(
            {"jobId": 1, "parameters": None}, {"run_id": 99}
        )
        assert presented["data"] == {"run_id": 99}

    def test_echo_merged_into_dict_result(self):
        presented = ENDPOINTS["databricks_read_dbfs"].present(
            {"path": "/tmp/a"}, {"bytes_read": 3, "data": "YWJj"}
        )
        assert presented == {"path": "/tmp/a", "bytes_read": 3, "data": "YWJj"}

    def test_plain_result_passes_through(self):
        result = {"cluster_id": "c1", "state": "RUNNING"}
        assert ENDPOINTS["databricks_get_cluster"].present({"clusterId": "c1"}, result) is result


# -----------------------------------------------------------------------------
# MCP Tool Conversion
# -----------------------------------------------------------------------------


class TestToMcpTool:
    def test_required_excludes_defaulted_and_fallback(self):
        tool = ENDPOINTS["databricks_execute_sql"].to_mcp_tool()
        assert tool.inputSchema.required == ["statement"]
        assert tool.inputSchema.properties["format"]["default"] == "JSON_ARRAY"

    def test_no_params(self):
        tool = ENDPOINTS["databricks_list_clusters"].to_mcp_tool()
        assert tool.inputSchema.properties == {}
        assert tool.inputSchema.required == []

    def test_types_in_schema(self):
        tool = ENDPOINTS["databricks_list_runs"].to_mcp_tool()
        properties = tool.inputSchema.properties
        assert properties["jobId"]["type"] == "integer"
        assert properties["activeOnly"]["type"] == "boolean"
        assert properties["limit"]["maximum"] == 100
