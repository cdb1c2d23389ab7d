from leetlog.blocks import parse_description_to_blocks
from leetlog.formatter import format_description

DESCRIPTION_HTML = """
<p>Given an array of integers&nbsp;<code>nums</code>&nbsp;and an integer&nbsp;<code>target</code>,
return <em>indices of the two numbers such that they add up to <code>target</code></em>.</p>
<p>&nbsp;</p>
<p><strong class="example">Example 1:</strong></p>
<pre><strong>Input:</strong> nums = [2,7,11,15], target = 9
<strong>Output:</strong> [0,1]
</pre>
<p><strong>Constraints:</strong></p>
<ul>
    <li><code>2 &lt;= nums.length &lt;= 10<sup>4</sup></code></li>
    <li>Only one valid answer exists.</li>
</ul>
<img src="x.png" alt="diagram">
"""


def test_full_description():
    text = format_description(DESCRIPTION_HTML)
    assert text == (
        "Given an array of integers `nums` and an integer `target`, "
        "return *indices of the two numbers such that they add up to `target`*.\n"
        "\n"
        "**Example 1:**\n"
        "\n"
        "```\n"
        "Input: nums = [2,7,11,15], target = 9\n"
        "Output: [0,1]\n"
        "```\n"
        "\n"
        "**Constraints:**\n"
        "\n"
        "• `2 <= nums.length <= 10^4`\n"
        "• Only one valid answer exists."
    )


def test_ordered_list_and_sup():
    text = format_description("<ol><li>first</li><li>x<sup>2</sup></li></ol>")
    assert text == "1. first\n2. x^2"


def test_line_breaks_and_empty_tags():
    assert format_description("<p>a<br>b</p><p><strong> </strong></p>") == "a\nb"


def test_empty_input():
    assert format_description("") == ""
    assert format_description("   ") == ""


def test_output_feeds_block_parser():
    blocks = parse_description_to_blocks(format_description(DESCRIPTION_HTML))
    assert [b["type"] for b in blocks] == [
        "paragraph",
        "heading_3",
        "code",
        "heading_3",
        "bulleted_list_item",
        "bulleted_list_item",
    ]


def test_sup_and_sub_inside_code():
    assert format_description("<p><code>1 &lt;= n &lt;= 10<sup>4</sup></code></p>") == "`1 <= n <= 10^4`"
    assert format_description("<pre>a<sub>i</sub> = x</pre>") == "```\na_i = x\n```"


def test_sub_in_text():
    assert format_description("<p>x<sub>0</sub> is first</p>") == "x_0 is first"


def test_b_and_i_tags():
    assert format_description("<p><b>Note</b> and <i>hint</i></p>") == "**Note** and *hint*"


def test_space_stays_outside_markers():
    assert format_description("<p><strong>Input: </strong>nums</p>") == "**Input:** nums"
    assert format_description("<p>see<em> this</em></p>") == "see *this*"
