import json
from typing import Optional

import graphviz

from RegexAST import ExprNode, NodeType
from RegexParser import RegexParser, DEFAULT_MAX_DEPTH


class ASTGraph:
    def __init__(self, node: ExprNode):
        self.root = node

    def _walk(self):
        """Yield (node_id, node, parent_id, edge_label) in pre-order"""
        next_id = 0
        stack = [(self.root, None, None)]
        while stack:
            node, parent_id, label = stack.pop()
            node_id = f"N{next_id}"
            next_id += 1
            yield node_id, node, parent_id, label

            ordered = node.type in (NodeType.Seq, NodeType.Or)
            children = list(enumerate(node.children))
            for index, child in reversed(children):
                stack.append((child, node_id, str(index) if ordered else None))

    def to_dot(self, regex_str=None):
        """Convert the AST to a Graphviz DOT representation for visualization"""
        dot = graphviz.Digraph(comment='AST')

        # children are drawn below their parent
        dot.attr(rankdir='TB')

        for node_id, node, parent_id, label in self._walk():
            if node.type == NodeType.Char:
                # "\\\\" instead of "\\" because the graphics library also tries to escape chars
                value = node.value.replace('\\', '\\\\')
                dot.node(node_id, f"Char '{value}'", shape='box', style='filled', fillcolor='lightgray')
            elif node.type == NodeType.Or:
                dot.node(node_id, 'Or', shape='diamond', style='filled', fillcolor='lightblue')
            else:
                dot.node(node_id, node.type.name, shape='ellipse')

            if parent_id is not None:
                if label is None:
                    dot.edge(parent_id, node_id)
                else:
                    dot.edge(parent_id, node_id, label=label, color='saddlebrown', fontcolor='saddlebrown')

        # Add the regex string at the bottom if provided
        if regex_str:
            escp = ""
            for char in regex_str:
                if char == '\\':
                    escp = escp + char * 2
                else:
                    escp = escp + char
            dot.attr(label=f"Regular Expression: {escp}")
            dot.attr(labelloc='b')

        return dot

    def render_to_file(self, filename='ast', format='png', regex_str=None):
        """Render the AST to a file"""
        dot = self.to_dot(regex_str)
        dot.render(filename, format=format, cleanup=True)
        return dot

    def to_json(self):
        """Convert the AST to a nested dict"""
        converted = {}
        result = None
        for node_id, node, parent_id, _ in self._walk():
            data = {"type": node.type.name}
            if node.type == NodeType.Char:
                data["value"] = node.value
            else:
                data["children"] = []
            converted[node_id] = data
            if parent_id is None:
                result = data
            else:
                converted[parent_id]["children"].append(data)
        return result

    def save_json(self, filename='ast.json'):
        """Save the AST as a JSON file"""
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(self.to_json(), f, indent=2, ensure_ascii=False)
        return filename


def regex_to_graph(regex_str: str, max_depth: Optional[int] = DEFAULT_MAX_DEPTH):
    """Parse a regular expression string and wrap its AST for export"""
    return ASTGraph(RegexParser(regex_str, max_depth).ast)


if __name__ == "__main__":
    # Example usage
    regex_str = "(a|b)*c\\+"

    graph = regex_to_graph(regex_str)

    print(f"Regex: {regex_str}")
    print(f"AST: {graph.root!r}")
    print(f"Canonical form: {graph.root.to_pattern()}")

    try:
        graph.render_to_file('ast_visualization', regex_str=regex_str, format='svg')
        graph.save_json()
        print("AST visualization saved as 'ast_visualization.svg'")
    except Exception as e:
        print(f"Could not create visualization: {e}")
