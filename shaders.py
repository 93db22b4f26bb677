from pyglet.graphics.shader import Shader, ShaderProgram


VERTEX_SOURCE = """
#version 330 core

uniform mat4 u_projection;
uniform mat4 u_view;
uniform mat4 u_model;

in vec3 position;
in vec3 normal;
in vec4 color;

out vec3 v_normal;
out vec4 v_color;

void main() {
    gl_Position = u_projection * u_view * u_model * vec4(position, 1.0);
    // Non-uniform scale (torso, head) needs the inverse transpose.
    v_normal = mat3(transpose(inverse(u_model))) * normal;
    v_color = color / 255.0;
}
"""


FRAGMENT_SOURCE = """
#version 330 core

uniform vec3 u_light_dir;

in vec3 v_normal;
in vec4 v_color;

out vec4 out_color;

void main() {
    float light = 0.0;
    if (length(v_normal) > 0.0) {
        light = max(dot(normalize(v_normal), normalize(u_light_dir)), 0.0);
    }
    out_color = vec4(v_color.rgb * (0.45 + 0.55 * light), v_color.a);
}
"""


def create_flat_shader():
    """Create the shader program used for the flat-shaded figure."""
    vertex_shader = Shader(VERTEX_SOURCE, "vertex")
    fragment_shader = Shader(FRAGMENT_SOURCE, "fragment")
    return ShaderProgram(vertex_shader, fragment_shader)
