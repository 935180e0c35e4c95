"""Edits never raise: broken parts just report valid=False."""

from domparts import ChildNodePart, Element

parent = Element("div")
children = [parent.append_child(Element("p")) for _ in range(5)]

first = ChildNodePart(children[0], children[2])
second = ChildNodePart(children[3], children[4])
print("before:", first.valid, second.valid)

# Move the start of the second range inside the first: the ranges now cross
parent.insert_before(children[3], children[1])
print("after crossing move:", first.valid, second.valid)

# Move it back and both recover
parent.insert_before(children[3], children[4])
print("after restoring:", first.valid, second.valid)
