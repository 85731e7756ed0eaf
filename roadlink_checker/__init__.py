"""Road Link Checker - Validate highway links in a road network graph.

Flags on/off-ramps and connector roads ("links") whose cumulative length
exceeds a threshold or whose classification does not match the roads they
connect, e.g. a secondary_link joining two motorways.

Modules:
    core: Link classification engine (class table, way assembly, neighbor
        resolution, verdicts)
    model: Road graph data structures (PathPoint, Node, RoadEdge, RoadGraph)
    checks: Check framework (flag registry, link and access checks, runner)

Example:
    from roadlink_checker.model import RoadGraph
    from roadlink_checker.checks import CheckRunner, build_checks

    graph = RoadGraph.load_json("graph.json")
    flags = CheckRunner(checks=build_checks(graph=graph)).run_graph(graph=graph)
"""
